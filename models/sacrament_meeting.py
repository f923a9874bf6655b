# models/sacrament_meeting.py

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.base import AuditedDocument, Form, start_of_day

BusinessType = Literal["relevo", "sostenimiento"]


class _Part(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Hymn(_Part):
    name: Optional[str] = None
    number: Optional[int] = None

    @field_validator("number", mode="before")
    @classmethod
    def _blank_number(cls, v):
        # form inputs send "" for an empty number box
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def label(self) -> str:
        if self.number is None and not self.name:
            return ""
        if self.number is None:
            return self.name or ""
        return f"{self.number} - {self.name or ''}".rstrip(" -")


class WardBusiness(_Part):
    """A release ("relevo") or sustaining ("sostenimiento") announced in the meeting."""

    id: Optional[str] = None
    type: Optional[BusinessType] = None
    person_name: Optional[str] = None
    calling: Optional[str] = None


class SacramentMeeting(AuditedDocument):
    date: datetime
    preside: Optional[str] = None
    dirige: Optional[str] = None
    pianist: Optional[str] = None
    music_director: Optional[str] = None
    authorities: Optional[str] = None
    opening_hymn: Optional[Hymn] = None
    opening_prayer: Optional[str] = None
    hymn_sacramental: Optional[Hymn] = None
    speakers: List[str] = []
    hymn_final: Optional[Hymn] = None
    closing_prayer: Optional[str] = None
    asuntos_del_barrio: List[WardBusiness] = []

    def summary(self) -> str:
        """Plain-text agenda, used as context for the AI helper."""
        def hymn(h: Optional[Hymn]) -> str:
            return h.label() if h else ""

        return "\n".join([
            f"Date: {self.date.date().isoformat()}",
            f"Presiding: {self.preside or ''}",
            f"Conducting: {self.dirige or ''}",
            f"Speakers: {', '.join(self.speakers)}",
            f"Opening Hymn: {hymn(self.opening_hymn)}",
            f"Sacramental Hymn: {hymn(self.hymn_sacramental)}",
            f"Closing Hymn: {hymn(self.hymn_final)}",
        ])


class SacramentMeetingForm(Form):
    date: date
    preside: Optional[str] = None
    dirige: Optional[str] = None
    pianist: Optional[str] = None
    music_director: Optional[str] = None
    authorities: Optional[str] = None
    opening_hymn: Optional[Hymn] = None
    opening_prayer: Optional[str] = None
    hymn_sacramental: Optional[Hymn] = None
    speakers: List[Optional[str]] = Field(default_factory=list, max_length=3)
    hymn_final: Optional[Hymn] = None
    closing_prayer: Optional[str] = None
    asuntos_del_barrio: List[WardBusiness] = []

    def to_document(self, tz: str) -> Dict[str, Any]:
        meeting = SacramentMeeting(
            **self.model_dump(exclude={"date", "speakers"}),
            date=start_of_day(self.date, tz),
            speakers=[s.strip() for s in self.speakers if s and s.strip()],
        )
        return meeting.to_store()
