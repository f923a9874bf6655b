# models/reunion.py

from datetime import date, datetime
from typing import Any, Dict, List

from pydantic import Field

from models.base import TIME_PATTERN, AuditedDocument, Form, combine_local
from models.interview import Status


class Reunion(AuditedDocument):
    """A one-on-one or small-group meeting ("reunión")."""

    reason: str
    participants: List[str] = []
    scheduled_at: datetime
    status: Status = "pending"


class ReunionForm(Form):
    reason: str = Field(min_length=3)
    participants: str = Field(min_length=2)  # comma separated
    scheduled_at: date
    time: str = Field(pattern=TIME_PATTERN)
    status: Status = "pending"

    def participant_list(self) -> List[str]:
        return [p.strip() for p in self.participants.split(",") if p.strip()]

    def to_document(self, tz: str) -> Dict[str, Any]:
        return {
            "reason": self.reason,
            "participants": self.participant_list(),
            "scheduledAt": combine_local(self.scheduled_at, self.time, tz),
            "status": self.status,
        }
