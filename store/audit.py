# store/audit.py
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from store.backend import DocumentStore
from store.collections import COLLECTION_LOGS
from store.errors import AccessDeniedError, FirestorePermissionError, StoreError, WriteFailedError
from store.events import PERMISSION_ERROR, WRITE_ERROR, ErrorEmitter

logger = logging.getLogger(__name__)

ACTIONS = ("create", "update", "delete", "login")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditLogger:
    """Appends who-did-what records to the logs collection. Never reads, never raises."""

    def __init__(self, store: DocumentStore, emitter: ErrorEmitter,
                 clock: Callable[[], datetime] = utcnow, collection: str = COLLECTION_LOGS):
        self._store = store
        self._emitter = emitter
        self._clock = clock
        self._collection = collection

    async def record(self, actor_id: str, action: str, entity_label: str, entity_id: str,
                     details: Optional[str] = "") -> Optional[str]:
        if action not in ACTIONS:
            raise ValueError(f"unknown audit action {action!r}")
        entry = {
            "userId": actor_id,
            "action": action,
            "entity": entity_label,
            "entityId": entity_id,
            "details": details or "",
            "timestamp": self._clock(),
        }
        log_id = self._store.new_id(self._collection)
        try:
            await self._store.put(self._collection, log_id, entry)
        except AccessDeniedError as e:
            self._emitter.emit(PERMISSION_ERROR, FirestorePermissionError(
                self._collection, "create", entry, cause=e))
            return None
        except Exception as e:
            if not isinstance(e, StoreError):
                logger.error("audit append for %s %s/%s raised %r", action, entity_label, entity_id, e, exc_info=True)
            self._emitter.emit(WRITE_ERROR, WriteFailedError(self._collection, "create", entry, cause=e))
            return None
        return log_id
