# services.py
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from config import AppConfig
from models.bishopric import BishopricMeeting
from models.interview import Interview
from models.log_entry import LogEntry
from models.reunion import Reunion
from models.sacrament_meeting import SacramentMeeting
from models.user import UserProfile
from store.backend import ASCENDING, DESCENDING, DocumentStore, OrderSpec
from store.collection import CollectionAccessor
from store.collections import (
    COLLECTION_BISHOPRIC_MEETINGS,
    COLLECTION_INTERVIEWS,
    COLLECTION_LOGS,
    COLLECTION_REUNIONES,
    COLLECTION_SACRAMENT_MEETINGS,
    COLLECTION_USERS,
)
from store.events import PERMISSION_ERROR, WRITE_ERROR, ErrorEmitter
from store.repository import Repository
from store.subcollection import SubcollectionAccessor, meeting_notes

logger = logging.getLogger(__name__)


class ErrorFeed:
    """Application-wide listener: logs every write error and keeps the latest few."""

    def __init__(self, limit: int = 50):
        self._events: Deque[Dict[str, Any]] = deque(maxlen=limit)

    def attach(self, emitter: ErrorEmitter) -> None:
        emitter.on(PERMISSION_ERROR, self)
        emitter.on(WRITE_ERROR, self)

    def __call__(self, error) -> None:
        logger.warning("write rejected: %s %s (%s)", error.operation, error.path, error.kind)
        self._events.appendleft({**error.to_dict(), "at": datetime.now(timezone.utc).isoformat()})

    def recent(self) -> List[Dict[str, Any]]:
        return list(self._events)


@dataclass
class Services:
    config: AppConfig
    store: DocumentStore
    emitter: ErrorEmitter
    accessor: CollectionAccessor
    notes: SubcollectionAccessor
    errors: ErrorFeed
    interviews: Repository[Interview]
    reuniones: Repository[Reunion]
    sacrament_meetings: Repository[SacramentMeeting]
    bishopric_meetings: Repository[BishopricMeeting]
    users: Repository[UserProfile]
    logs: Repository[LogEntry]


def make_store(cfg: AppConfig) -> DocumentStore:
    if cfg.use_memory_store:
        from store.memory import MemoryStore
        logger.info("using in-memory document store")
        return MemoryStore()
    from store.firestore_store import FirestoreStore, initialize_firebase
    return FirestoreStore(initialize_firebase(cfg))


def build_services(cfg: AppConfig, store: Optional[DocumentStore] = None,
                   emitter: Optional[ErrorEmitter] = None) -> Services:
    store = store if store is not None else make_store(cfg)
    emitter = emitter or ErrorEmitter()
    accessor = CollectionAccessor(store, emitter)
    errors = ErrorFeed(cfg.recent_errors_limit)
    errors.attach(emitter)

    def repo(collection, model, label, order_field=None):
        order = OrderSpec(order_field, DESCENDING) if order_field else None
        return Repository(accessor, collection, model, label, order)

    return Services(
        config=cfg,
        store=store,
        emitter=emitter,
        accessor=accessor,
        notes=meeting_notes(accessor),
        errors=errors,
        interviews=repo(COLLECTION_INTERVIEWS, Interview, "interview", "scheduledDate"),
        reuniones=repo(COLLECTION_REUNIONES, Reunion, "reunion", "scheduledAt"),
        sacrament_meetings=repo(COLLECTION_SACRAMENT_MEETINGS, SacramentMeeting, "sacramentMeeting", "date"),
        bishopric_meetings=repo(COLLECTION_BISHOPRIC_MEETINGS, BishopricMeeting, "bishopricMeeting", "date"),
        users=Repository(accessor, COLLECTION_USERS, UserProfile, "user", OrderSpec("name", ASCENDING)),
        logs=repo(COLLECTION_LOGS, LogEntry, "log", "timestamp"),
    )
