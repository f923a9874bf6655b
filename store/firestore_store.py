# store/firestore_store.py
import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as gexc
from google.auth import exceptions as auth_exceptions
from google.cloud.firestore import Query

from config import AppConfig
from store.backend import ASCENDING, OrderSpec
from store.errors import AccessDeniedError, DocumentMissingError, StoreError

logger = logging.getLogger(__name__)


def initialize_firebase(cfg: AppConfig):
    """Initialise the default Firebase app once and return a Firestore client."""
    try:
        app = firebase_admin.get_app()
    except ValueError:
        options = {"projectId": cfg.firebase_project_id} if cfg.firebase_project_id else None
        cred = credentials.Certificate(cfg.firebase_credentials) if cfg.firebase_credentials else None
        app = firebase_admin.initialize_app(cred, options)
        logger.info("firebase app initialised (project=%s)", cfg.firebase_project_id or "default")
    return firestore.client(app)


def _translate(exc: Exception, what: str) -> StoreError:
    if isinstance(exc, gexc.PermissionDenied):
        return AccessDeniedError(f"{what}: {exc.message}")
    if isinstance(exc, gexc.NotFound):
        return DocumentMissingError(f"{what}: {exc.message}")
    # retries exhausted, credential refresh or transport failures
    return StoreError(f"{what}: {exc}")


class FirestoreStore:
    """DocumentStore over the synchronous Firestore client, one worker thread per call."""

    def __init__(self, client):
        self._client = client

    def new_id(self, path: str) -> str:
        # ids are generated client-side, no round trip
        return self._client.collection(path).document().id

    async def _run(self, what: str, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except (gexc.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            raise _translate(e, what) from e

    async def fetch(self, path: str, doc_id: str) -> Optional[Dict[str, Any]]:
        snap = await self._run(f"get {path}/{doc_id}", self._client.collection(path).document(doc_id).get)
        return snap.to_dict() if snap.exists else None

    async def query(self, path: str, order: Optional[OrderSpec] = None) -> List[Tuple[str, Dict[str, Any]]]:
        ref = self._client.collection(path)
        if order is not None:
            direction = Query.ASCENDING if order.direction == ASCENDING else Query.DESCENDING
            ref = ref.order_by(order.field, direction=direction)

        def _collect():
            return [(snap.id, snap.to_dict() or {}) for snap in ref.stream()]

        return await self._run(f"list {path}", _collect)

    async def put(self, path: str, doc_id: str, data: Dict[str, Any]) -> None:
        await self._run(f"create {path}/{doc_id}", self._client.collection(path).document(doc_id).set, data)

    async def merge(self, path: str, doc_id: str, data: Dict[str, Any]) -> None:
        await self._run(f"update {path}/{doc_id}", self._client.collection(path).document(doc_id).update, data)

    async def remove(self, path: str, doc_id: str) -> None:
        await self._run(f"delete {path}/{doc_id}", self._client.collection(path).document(doc_id).delete)
