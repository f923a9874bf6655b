# store/memory.py
import copy
import uuid
from typing import Any, Dict, List, Optional, Tuple, Type

from store.backend import ASCENDING, OrderSpec
from store.errors import AccessDeniedError, DocumentMissingError, StoreError

READ = "read"
CREATE = "create"
UPDATE = "update"
DELETE = "delete"
ALL_OPERATIONS = (READ, CREATE, UPDATE, DELETE)


class MemoryStore:
    """
    In-process DocumentStore used for local runs (USE_MEMORY_STORE=true) and tests.

    Behaves like Firestore where the accessors can tell the difference:
    generated ids, shallow merge, and ordered queries skipping documents
    that lack the order field.
    """

    def __init__(self):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._rules: List[Tuple[str, Tuple[str, ...], Type[StoreError]]] = []

    # ---------- access rules ----------

    def deny(self, prefix: str, *operations: str, error: Type[StoreError] = AccessDeniedError) -> None:
        """Reject `operations` (all when empty) on paths under `prefix`."""
        self._rules.append((prefix.strip("/"), tuple(operations) or ALL_OPERATIONS, error))

    def allow_all(self) -> None:
        self._rules.clear()

    def _check(self, path: str, operation: str) -> None:
        for prefix, ops, error in self._rules:
            if operation in ops and (path == prefix or path.startswith(prefix + "/")):
                raise error(f"{operation} denied on {path}")

    # ---------- DocumentStore ----------

    def new_id(self, path: str) -> str:
        return uuid.uuid4().hex[:20]

    async def fetch(self, path: str, doc_id: str) -> Optional[Dict[str, Any]]:
        self._check(f"{path}/{doc_id}", READ)
        doc = self._data.get(path, {}).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def query(self, path: str, order: Optional[OrderSpec] = None) -> List[Tuple[str, Dict[str, Any]]]:
        self._check(path, READ)
        rows = [(doc_id, copy.deepcopy(doc)) for doc_id, doc in self._data.get(path, {}).items()]
        if order is None:
            return rows
        rows = [r for r in rows if order.field in r[1]]
        return sorted(
            rows,
            key=lambda r: (r[1][order.field] is not None, r[1][order.field]),
            reverse=order.direction != ASCENDING,
        )

    async def put(self, path: str, doc_id: str, data: Dict[str, Any]) -> None:
        self._check(f"{path}/{doc_id}", CREATE)
        self._data.setdefault(path, {})[doc_id] = copy.deepcopy(data)

    async def merge(self, path: str, doc_id: str, data: Dict[str, Any]) -> None:
        self._check(f"{path}/{doc_id}", UPDATE)
        docs = self._data.get(path, {})
        if doc_id not in docs:
            raise DocumentMissingError(f"{path}/{doc_id} does not exist")
        docs[doc_id].update(copy.deepcopy(data))

    async def remove(self, path: str, doc_id: str) -> None:
        self._check(f"{path}/{doc_id}", DELETE)
        self._data.get(path, {}).pop(doc_id, None)

    # ---------- inspection ----------

    def documents(self, path: str) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._data.get(path, {}))
