from datetime import datetime, timezone

import pytest

from store.backend import ASCENDING, OrderSpec
from store.collection import CollectionAccessor
from store.errors import FirestorePermissionError, ReadError, WriteFailedError
from store.events import PERMISSION_ERROR, WRITE_ERROR
from store.memory import MemoryStore

T = datetime(2025, 4, 6, 10, 0, tzinfo=timezone.utc)


def _logs(store):
    return list(store.documents("logs").values())


async def _create_jane(accessor):
    pending = accessor.create(
        "interviews",
        {"personInterviewed": "Jane", "status": "pending", "scheduledDate": T},
        "u1", "interview",
    )
    return await pending


async def test_create_then_get(accessor):
    doc_id = await _create_jane(accessor)

    doc = await accessor.get("interviews", doc_id)
    assert doc["id"] == doc_id
    assert doc["status"] == "pending"
    assert doc["createdBy"] == "u1"


async def test_create_overwrites_caller_audit_fields(accessor, store, fixed_now):
    forged = datetime(1999, 1, 1, tzinfo=timezone.utc)
    pending = accessor.create(
        "interviews",
        {"personInterviewed": "Jane", "createdBy": "mallory", "updatedBy": "mallory",
         "createdAt": forged, "updatedAt": forged, "id": "chosen-by-caller"},
        "u1", "interview",
    )
    doc_id = await pending

    stored = store.documents("interviews")[doc_id]
    assert doc_id != "chosen-by-caller"
    assert stored["createdBy"] == stored["updatedBy"] == "u1"
    assert stored["createdAt"] == stored["updatedAt"] == fixed_now
    assert "id" not in stored


async def test_create_returns_id_before_write_completes(accessor):
    pending = accessor.create("interviews", {"personInterviewed": "Jane"}, "u1", "interview")
    assert pending.id
    assert await pending == pending.id


async def test_update_merges_and_keeps_identity(accessor):
    doc_id = await _create_jane(accessor)

    await accessor.update("interviews", doc_id, {"status": "completed"}, "u2", "interview")
    await accessor.update("interviews", doc_id, {"purpose": "temple recommend"}, "u3", "interview")

    doc = await accessor.get("interviews", doc_id)
    assert doc["id"] == doc_id
    assert doc["status"] == "completed"
    assert doc["purpose"] == "temple recommend"
    assert doc["personInterviewed"] == "Jane"
    assert doc["updatedBy"] == "u3"
    assert doc["createdBy"] == "u1"


async def test_update_cannot_rewrite_authorship(accessor):
    doc_id = await _create_jane(accessor)

    await accessor.update("interviews", doc_id, {"createdBy": "mallory", "id": "other"}, "u2", "interview")

    doc = await accessor.get("interviews", doc_id)
    assert doc["createdBy"] == "u1"
    assert doc["id"] == doc_id


async def test_delete_removes_and_logs(accessor, store):
    doc_id = await _create_jane(accessor)

    await accessor.delete("interviews", doc_id, "u2", "interview")

    assert await accessor.get("interviews", doc_id) is None
    deletes = [e for e in _logs(store) if e["action"] == "delete"]
    assert len(deletes) == 1
    assert deletes[0]["entityId"] == doc_id
    assert deletes[0]["userId"] == "u2"


async def test_each_accepted_write_logs_once(accessor, store):
    doc_id = await _create_jane(accessor)
    await accessor.update("interviews", doc_id, {"status": "completed"}, "u2", "interview")
    await accessor.delete("interviews", doc_id, "u2", "interview")

    entries = _logs(store)
    assert sorted(e["action"] for e in entries) == ["create", "delete", "update"]
    assert all(e["entityId"] == doc_id and e["entity"] == "interview" for e in entries)
    create = next(e for e in entries if e["action"] == "create")
    assert '"personInterviewed": "Jane"' in create["details"]


async def test_rejected_write_is_reported_not_raised(accessor, store, events):
    doc_id = await _create_jane(accessor)
    store.deny("interviews", "update")

    pending = accessor.update("interviews", doc_id, {"status": "completed"}, "u2", "interview")
    await accessor.flush()

    assert len(events) == 1
    event, err = events[0]
    assert event == PERMISSION_ERROR
    assert err.path == f"interviews/{doc_id}"
    assert err.operation == "update"
    assert err.attempted_data["status"] == "completed"
    assert isinstance(pending.error, FirestorePermissionError)
    # no audit record for the rejected write
    assert [e["action"] for e in _logs(store)] == ["create"]
    assert (await accessor.get("interviews", doc_id))["status"] == "pending"


async def test_awaiting_a_rejected_write_raises(accessor, store, events):
    store.deny("interviews", "create")

    with pytest.raises(FirestorePermissionError) as info:
        await accessor.create("interviews", {"personInterviewed": "Jane"}, "u1", "interview")

    assert info.value.path == "interviews"
    assert info.value.operation == "create"
    assert len(events) == 1


async def test_update_of_missing_document_is_a_write_error(accessor, events):
    pending = accessor.update("interviews", "nope", {"status": "completed"}, "u2", "interview")

    with pytest.raises(WriteFailedError):
        await pending
    assert [e for e, _ in events] == [WRITE_ERROR]


async def test_audit_failure_goes_to_emitter(accessor, store, events):
    store.deny("logs", "create")

    doc_id = await _create_jane(accessor)

    assert await accessor.get("interviews", doc_id) is not None
    assert len(events) == 1
    event, err = events[0]
    assert event == PERMISSION_ERROR
    assert err.path == "logs"
    assert err.attempted_data["entityId"] == doc_id


async def test_list_orders_by_field(accessor):
    for day in (3, 1, 2):
        await accessor.create("interviews", {"date": datetime(2025, 1, day, tzinfo=timezone.utc)},
                              "u1", "interview")

    docs = await accessor.list("interviews", OrderSpec("date", "desc"))
    assert [d["date"].day for d in docs] == [3, 2, 1]

    docs = await accessor.list("interviews", OrderSpec("date", ASCENDING))
    assert [d["date"].day for d in docs] == [1, 2, 3]


async def test_list_ties_are_stable(accessor):
    same = datetime(2025, 1, 1, tzinfo=timezone.utc)
    ids = [await accessor.create("interviews", {"date": same, "n": n}, "u1", "interview") for n in range(3)]

    first = [d["id"] for d in await accessor.list("interviews", OrderSpec("date"))]
    second = [d["id"] for d in await accessor.list("interviews", OrderSpec("date"))]
    assert first == second == ids


async def test_list_denied_raises_read_error(accessor, store):
    store.deny("interviews", "read")

    with pytest.raises(ReadError):
        await accessor.list("interviews")


async def test_get_missing_returns_none(accessor):
    assert await accessor.get("interviews", "missing") is None


async def test_get_denied_raises_read_error(accessor, store):
    store.deny("interviews", "read")

    with pytest.raises(ReadError):
        await accessor.get("interviews", "anything")


async def test_fire_and_forget_writes_complete_on_flush(accessor, store):
    accessor.create("interviews", {"personInterviewed": "A"}, "u1", "interview")
    accessor.create("interviews", {"personInterviewed": "B"}, "u1", "interview")

    await accessor.flush()

    assert len(store.documents("interviews")) == 2
    assert len(_logs(store)) == 2


class _BrokenStore(MemoryStore):
    """Store whose writes fail with something other than a StoreError."""

    def __init__(self, fail_on: str):
        super().__init__()
        self.fail_on = fail_on

    async def put(self, path, doc_id, data):
        if path == self.fail_on:
            raise RuntimeError("deadline exceeded after retries")
        await super().put(path, doc_id, data)


async def test_unexpected_write_failure_is_published(emitter, events):
    accessor = CollectionAccessor(_BrokenStore("interviews"), emitter)

    pending = accessor.create("interviews", {"personInterviewed": "A"}, "u1", "interview")
    await accessor.flush()

    assert [e for e, _ in events] == [WRITE_ERROR]
    err = events[0][1]
    assert err.operation == "create"
    assert isinstance(err.cause, RuntimeError)
    assert pending.error is err


async def test_unexpected_audit_failure_is_published(emitter, events):
    store = _BrokenStore("logs")
    accessor = CollectionAccessor(store, emitter)

    doc_id = await accessor.create("interviews", {"personInterviewed": "A"}, "u1", "interview")

    assert doc_id in store.documents("interviews")
    assert [e for e, _ in events] == [WRITE_ERROR]
    assert events[0][1].path == "logs"
