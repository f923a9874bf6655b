# store/backend.py
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple

DESCENDING = "desc"
ASCENDING = "asc"


@dataclass(frozen=True)
class OrderSpec:
    field: str
    direction: str = DESCENDING

    def __post_init__(self):
        if self.direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"direction must be 'asc' or 'desc', got {self.direction!r}")


class DocumentStore(Protocol):
    """
    What the accessors need from a document database.

    Paths are collection paths ("interviews", "bishopricMeetings/abc/notes").
    Implementations raise AccessDeniedError when rules reject an operation,
    DocumentMissingError when merge targets a missing document, and
    StoreError for anything else.
    """

    def new_id(self, path: str) -> str: ...

    async def fetch(self, path: str, doc_id: str) -> Optional[Dict[str, Any]]: ...

    async def query(self, path: str, order: Optional[OrderSpec] = None) -> List[Tuple[str, Dict[str, Any]]]: ...

    async def put(self, path: str, doc_id: str, data: Dict[str, Any]) -> None: ...

    async def merge(self, path: str, doc_id: str, data: Dict[str, Any]) -> None: ...

    async def remove(self, path: str, doc_id: str) -> None: ...


def join_path(*parts: str) -> str:
    return "/".join(p.strip("/") for p in parts if p)
