from datetime import datetime, timezone

from store.events import PERMISSION_ERROR
from store.subcollection import meeting_notes


def _day(d):
    return datetime(2025, 5, d, tzinfo=timezone.utc)


async def test_notes_listed_newest_first_and_tagged(accessor):
    notes = meeting_notes(accessor)
    for d in (1, 9, 4):
        await notes.create("m1", {"date": _day(d), "content": f"note for day {d}"}, "u1")
    await notes.create("m2", {"date": _day(5), "content": "other meeting"}, "u1")

    listed = await notes.list("m1")

    assert [n["date"].day for n in listed] == [9, 4, 1]
    assert all(n["meetingId"] == "m1" for n in listed)


async def test_parent_reference_is_never_stored(accessor, store):
    notes = meeting_notes(accessor)
    note_id = await notes.create("m1", {"date": _day(1), "content": "welfare needs", "meetingId": "m2"}, "u1")

    await notes.update("m1", note_id, {"content": "welfare needs (updated)", "meetingId": "m2"}, "u2")

    stored = store.documents("bishopricMeetings/m1/notes")[note_id]
    assert "meetingId" not in stored
    assert stored["content"] == "welfare needs (updated)"
    assert store.documents("bishopricMeetings/m2/notes") == {}
    assert (await notes.get("m1", note_id))["meetingId"] == "m1"


async def test_note_writes_are_audited_with_meeting(accessor, store):
    notes = meeting_notes(accessor)
    note_id = await notes.create("m1", {"date": _day(1), "content": "welfare needs"}, "u1")
    await notes.delete("m1", note_id, "u1")

    entries = list(store.documents("logs").values())
    assert sorted(e["action"] for e in entries) == ["create", "delete"]
    assert all(e["entity"] == "bishopricNote" for e in entries)
    assert all(e["details"] == "MeetingID: m1" for e in entries)
    assert await notes.get("m1", note_id) is None


async def test_rejected_note_update_reports_path(accessor, store, events):
    notes = meeting_notes(accessor)
    note_id = await notes.create("m1", {"date": _day(1), "content": "welfare needs"}, "u1")
    store.deny("bishopricMeetings/m1/notes", "update")

    notes.update("m1", note_id, {"content": "changed"}, "u2")
    await accessor.flush()

    assert len(events) == 1
    event, err = events[0]
    assert event == PERMISSION_ERROR
    assert err.path == f"bishopricMeetings/m1/notes/{note_id}"
    assert err.operation == "update"
