# models/base.py
from datetime import date, datetime, time
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

# Field names of the audit stamp; the accessor owns these.
AUDIT_FIELD_NAMES = ("created_by", "created_at", "updated_by", "updated_at")


class Document(BaseModel):
    """A stored document. Field names are snake_case in Python, camelCase in Firestore."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_store(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"id", *AUDIT_FIELD_NAMES}, exclude_none=True)


class AuditedDocument(Document):
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class Form(BaseModel):
    """Client input. Stricter than the stored model (lengths, formats)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore",
                              str_strip_whitespace=True)


def combine_local(day: date, hhmm: str, tz: str) -> datetime:
    hour, minute = (int(p) for p in hhmm.split(":"))
    return datetime.combine(day, time(hour, minute), tzinfo=ZoneInfo(tz))


def start_of_day(day: date, tz: str) -> datetime:
    return datetime.combine(day, time(0, 0), tzinfo=ZoneInfo(tz))
