# store/collection.py
import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from store.audit import AuditLogger, utcnow
from store.backend import DocumentStore, OrderSpec
from store.errors import (
    AccessDeniedError,
    FirestorePermissionError,
    ReadError,
    StoreError,
    WriteFailedError,
)
from store.events import PERMISSION_ERROR, WRITE_ERROR, ErrorEmitter

logger = logging.getLogger(__name__)

# Owned by the accessor; whatever the caller sends for these is discarded.
AUDIT_FIELDS = ("createdBy", "createdAt", "updatedBy", "updatedAt")


def _describe(data: Dict[str, Any]) -> str:
    return json.dumps(data, default=str, ensure_ascii=False)


class PendingWrite:
    """
    Handle for a write that has been issued but maybe not acknowledged.

    Ignoring it is fine (failures are on the emitter). Awaiting it gives the
    document id for creates, None otherwise, or raises the published error.
    """

    def __init__(self, doc_id: str, path: str, operation: str, task: "asyncio.Task"):
        self.id = doc_id
        self.path = path
        self.operation = operation
        self._task = task

    def __await__(self):
        return self._task.__await__()

    def done(self) -> bool:
        return self._task.done()

    @property
    def error(self) -> Optional[BaseException]:
        if not self._task.done() or self._task.cancelled():
            return None
        return self._task.exception()

    def add_done_callback(self, fn: Callable[["PendingWrite"], None]) -> None:
        self._task.add_done_callback(lambda _t: fn(self))

    def __repr__(self):
        state = "pending" if not self.done() else ("failed" if self.error else "ok")
        return f"<PendingWrite {self.operation} {self.path} {state}>"


class CollectionAccessor:
    """Read/write/delete over any named collection (or subcollection path)."""

    def __init__(self, store: DocumentStore, emitter: ErrorEmitter,
                 audit: Optional[AuditLogger] = None, clock: Callable[[], datetime] = utcnow):
        self._store = store
        self._emitter = emitter
        self._clock = clock
        self._audit = audit or AuditLogger(store, emitter, clock=clock)
        self._pending: Set[asyncio.Task] = set()

    @property
    def emitter(self) -> ErrorEmitter:
        return self._emitter

    @property
    def audit(self) -> AuditLogger:
        return self._audit

    # ----------------------------- reads (fail loud) -----------------------------

    async def list(self, collection: str, order: Optional[OrderSpec] = None) -> List[Dict[str, Any]]:
        try:
            rows = await self._store.query(collection, order)
        except StoreError as e:
            raise ReadError(collection, "list", e) from e
        return [{**data, "id": doc_id} for doc_id, data in rows]

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            data = await self._store.fetch(collection, doc_id)
        except StoreError as e:
            raise ReadError(f"{collection}/{doc_id}", "get", e) from e
        if data is None:
            return None
        return {**data, "id": doc_id}

    # ----------------------------- writes (fail quiet, observable) -----------------------------

    def create(self, collection: str, data: Dict[str, Any], actor_id: str, entity_label: str,
               doc_id: Optional[str] = None, details: Optional[str] = None) -> PendingWrite:
        doc_id = doc_id or self._store.new_id(collection)
        now = self._clock()
        payload = {k: v for k, v in data.items() if k != "id"}
        payload.update(createdBy=actor_id, createdAt=now, updatedBy=actor_id, updatedAt=now)
        return self._issue(
            "create", collection, doc_id, payload,
            lambda: self._store.put(collection, doc_id, payload),
            actor_id, entity_label, _describe(data) if details is None else details,
        )

    def update(self, collection: str, doc_id: str, data: Dict[str, Any], actor_id: str, entity_label: str,
               details: Optional[str] = None) -> PendingWrite:
        payload = {k: v for k, v in data.items() if k != "id" and k not in AUDIT_FIELDS}
        payload.update(updatedBy=actor_id, updatedAt=self._clock())
        return self._issue(
            "update", collection, doc_id, payload,
            lambda: self._store.merge(collection, doc_id, payload),
            actor_id, entity_label, _describe(data) if details is None else details,
        )

    def delete(self, collection: str, doc_id: str, actor_id: str, entity_label: str,
               details: Optional[str] = None) -> PendingWrite:
        return self._issue(
            "delete", collection, doc_id, None,
            lambda: self._store.remove(collection, doc_id),
            actor_id, entity_label, details or "",
        )

    async def flush(self) -> None:
        """Wait for every write still in flight. Failures stay on the emitter."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _issue(self, operation: str, collection: str, doc_id: str, payload: Optional[Dict[str, Any]],
               write: Callable[[], Awaitable[None]], actor_id: str, entity_label: str,
               details: str) -> PendingWrite:
        target = collection if operation == "create" else f"{collection}/{doc_id}"

        async def run():
            try:
                await write()
            except AccessDeniedError as e:
                err = FirestorePermissionError(target, operation, payload, cause=e)
                self._emitter.emit(PERMISSION_ERROR, err)
                raise err from e
            except StoreError as e:
                err = WriteFailedError(target, operation, payload, cause=e)
                self._emitter.emit(WRITE_ERROR, err)
                raise err from e
            except Exception as e:
                # not a store failure: most likely a value the backend cannot encode
                logger.error("%s on %s raised %r", operation, target, e, exc_info=True)
                err = WriteFailedError(target, operation, payload, cause=e)
                self._emitter.emit(WRITE_ERROR, err)
                raise err from e
            await self._audit.record(actor_id, operation, entity_label, doc_id, details)
            return doc_id if operation == "create" else None

        task = asyncio.get_running_loop().create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._settle)
        return PendingWrite(doc_id, target, operation, task)

    def _settle(self, task: "asyncio.Task") -> None:
        self._pending.discard(task)
        if not task.cancelled():
            # already published; retrieving it keeps asyncio from logging it again
            task.exception()
