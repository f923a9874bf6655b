# store/repository.py
from functools import lru_cache
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, get_args

from pydantic import ConfigDict, Field, ValidationError, create_model, model_validator

from models.base import AUDIT_FIELD_NAMES, Document
from store.backend import OrderSpec
from store.collection import CollectionAccessor, PendingWrite
from store.errors import ReadError

T = TypeVar("T", bound=Document)


def _nullable(annotation) -> bool:
    return annotation is Any or annotation is type(None) or type(None) in get_args(annotation)


@lru_cache(maxsize=None)
def patch_model(model: Type[Document]) -> Type[Document]:
    """
    Same fields as `model`, all optional, unknown keys rejected. Explicit
    nulls are only allowed on fields the full model allows them on.
    """
    non_null = set()
    fields: Dict[str, Any] = {}
    for name, info in model.model_fields.items():
        if name == "id" or name in AUDIT_FIELD_NAMES:
            continue
        if not _nullable(info.annotation):
            non_null.add(name)
        fields[name] = (Optional[info.annotation], Field(None, alias=info.alias))

    def reject_nulls(self):
        nulls = sorted(n for n in self.model_fields_set if n in non_null and getattr(self, n) is None)
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    return create_model(
        f"{model.__name__}Patch",
        __config__=ConfigDict(populate_by_name=True, extra="forbid"),
        __validators__={"reject_nulls": model_validator(mode="after")(reject_nulls)},
        **fields,
    )


def validate_patch(model: Type[Document], data: Dict[str, Any]) -> Dict[str, Any]:
    patch = patch_model(model).model_validate(data)
    return patch.model_dump(by_alias=True, exclude_unset=True)


def parse_stored(model: Type[T], doc: Dict[str, Any], path: str, operation: str) -> T:
    """Parse a document read from the store. Bad stored data is a read failure, not bad input."""
    try:
        return model.model_validate(doc)
    except ValidationError as e:
        raise ReadError(path, operation, e) from e


class Repository(Generic[T]):
    """Typed view of one collection: validates before writing, parses on read."""

    def __init__(self, accessor: CollectionAccessor, collection: str, model: Type[T],
                 entity_label: str, order: Optional[OrderSpec] = None):
        self.accessor = accessor
        self.collection = collection
        self.model = model
        self.entity_label = entity_label
        self.order = order

    async def list(self) -> List[T]:
        docs = await self.accessor.list(self.collection, self.order)
        return [parse_stored(self.model, d, self.collection, "list") for d in docs]

    async def get(self, doc_id: str) -> Optional[T]:
        doc = await self.accessor.get(self.collection, doc_id)
        if doc is None:
            return None
        return parse_stored(self.model, doc, f"{self.collection}/{doc_id}", "get")

    def create(self, data: Dict[str, Any], actor_id: str, doc_id: Optional[str] = None) -> PendingWrite:
        doc = self.model.model_validate(data)
        return self.accessor.create(self.collection, doc.to_store(), actor_id, self.entity_label, doc_id=doc_id)

    def update(self, doc_id: str, data: Dict[str, Any], actor_id: str) -> PendingWrite:
        return self.accessor.update(self.collection, doc_id, validate_patch(self.model, data),
                                    actor_id, self.entity_label)

    def delete(self, doc_id: str, actor_id: str) -> PendingWrite:
        return self.accessor.delete(self.collection, doc_id, actor_id, self.entity_label)
