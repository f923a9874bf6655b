# store/subcollection.py
from typing import Any, Dict, List, Optional

from store.backend import DESCENDING, OrderSpec, join_path
from store.collection import CollectionAccessor, PendingWrite
from store.collections import COLLECTION_BISHOPRIC_MEETINGS, SUBCOLLECTION_NOTES


class SubcollectionAccessor:
    """
    Child documents scoped under one parent document, e.g. notes under a
    bishopric meeting. The parent key is derived from the path on every read
    and is never stored, so a write cannot move a child to another parent.
    """

    def __init__(self, accessor: CollectionAccessor, parent_collection: str, child_collection: str,
                 parent_key: str, order_field: str, entity_label: str):
        self._accessor = accessor
        self._parent_collection = parent_collection
        self._child_collection = child_collection
        self._parent_key = parent_key
        self._order = OrderSpec(order_field, DESCENDING)
        self.entity_label = entity_label

    def path(self, parent_id: str) -> str:
        return join_path(self._parent_collection, parent_id, self._child_collection)

    def _details(self, parent_id: str) -> str:
        return f"MeetingID: {parent_id}"

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k != self._parent_key}

    async def list(self, parent_id: str) -> List[Dict[str, Any]]:
        docs = await self._accessor.list(self.path(parent_id), self._order)
        return [{**d, self._parent_key: parent_id} for d in docs]

    async def get(self, parent_id: str, child_id: str) -> Optional[Dict[str, Any]]:
        doc = await self._accessor.get(self.path(parent_id), child_id)
        return {**doc, self._parent_key: parent_id} if doc is not None else None

    def create(self, parent_id: str, data: Dict[str, Any], actor_id: str) -> PendingWrite:
        return self._accessor.create(self.path(parent_id), self._clean(data), actor_id,
                                     self.entity_label, details=self._details(parent_id))

    def update(self, parent_id: str, child_id: str, data: Dict[str, Any], actor_id: str) -> PendingWrite:
        return self._accessor.update(self.path(parent_id), child_id, self._clean(data), actor_id,
                                     self.entity_label, details=self._details(parent_id))

    def delete(self, parent_id: str, child_id: str, actor_id: str) -> PendingWrite:
        return self._accessor.delete(self.path(parent_id), child_id, actor_id,
                                     self.entity_label, details=self._details(parent_id))


def meeting_notes(accessor: CollectionAccessor) -> SubcollectionAccessor:
    return SubcollectionAccessor(
        accessor,
        parent_collection=COLLECTION_BISHOPRIC_MEETINGS,
        child_collection=SUBCOLLECTION_NOTES,
        parent_key="meetingId",
        order_field="date",
        entity_label="bishopricNote",
    )
