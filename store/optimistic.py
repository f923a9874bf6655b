# store/optimistic.py
import copy
import logging
from typing import Any, Dict, List, Optional

from store.backend import OrderSpec
from store.collection import CollectionAccessor, PendingWrite

logger = logging.getLogger(__name__)


class OptimisticList:
    """
    Local copy of one collection for one actor.

    Every mutation changes `items` first, then issues the write; if the write
    fails the local change is undone. The failure itself is already on the
    accessor's emitter, so callers only need a listener there to show it.
    """

    def __init__(self, accessor: CollectionAccessor, collection: str, entity_label: str,
                 actor_id: str, order: Optional[OrderSpec] = None):
        self._accessor = accessor
        self.collection = collection
        self.entity_label = entity_label
        self.actor_id = actor_id
        self.order = order
        self.items: List[Dict[str, Any]] = []
        # last values the store acknowledged, per document
        self._confirmed: Dict[str, Dict[str, Any]] = {}

    async def refresh(self) -> List[Dict[str, Any]]:
        self.items = await self._accessor.list(self.collection, self.order)
        self._confirmed = {i["id"]: copy.deepcopy(i) for i in self.items}
        return self.items

    def find(self, doc_id: str) -> Optional[Dict[str, Any]]:
        return next((i for i in self.items if i["id"] == doc_id), None)

    def add(self, data: Dict[str, Any]) -> PendingWrite:
        pending = self._accessor.create(self.collection, data, self.actor_id, self.entity_label)
        local = {**data, "id": pending.id}
        self.items.insert(0, local)

        def settle(p: PendingWrite):
            if p.error is None:
                self._confirmed[p.id] = copy.deepcopy(local)
            elif local in self.items:
                logger.info("rolling back local create of %s", p.id)
                self.items.remove(local)

        pending.add_done_callback(settle)
        return pending

    def edit(self, doc_id: str, patch: Dict[str, Any]) -> PendingWrite:
        current = self.find(doc_id)
        applied = copy.deepcopy(patch)
        if current is not None:
            current.update(patch)
        pending = self._accessor.update(self.collection, doc_id, patch, self.actor_id, self.entity_label)

        def settle(p: PendingWrite):
            confirmed = self._confirmed.setdefault(doc_id, {})
            if p.error is None:
                confirmed.update(copy.deepcopy(applied))
                return
            if current is None:
                return
            # a key changed again by a later edit keeps the later value
            stale = [k for k, v in applied.items() if k in current and current[k] == v]
            if stale:
                logger.info("rolling back local update of %s (%s)", doc_id, ", ".join(stale))
            for k in stale:
                if k in confirmed:
                    current[k] = copy.deepcopy(confirmed[k])
                else:
                    del current[k]

        pending.add_done_callback(settle)
        return pending

    def remove(self, doc_id: str) -> PendingWrite:
        current = self.find(doc_id)
        index = self.items.index(current) if current is not None else None
        if current is not None:
            self.items.remove(current)
        pending = self._accessor.delete(self.collection, doc_id, self.actor_id, self.entity_label)

        def settle(p: PendingWrite):
            if p.error is None:
                self._confirmed.pop(doc_id, None)
            elif current is not None:
                logger.info("rolling back local delete of %s", doc_id)
                self.items.insert(min(index, len(self.items)), current)

        pending.add_done_callback(settle)
        return pending
