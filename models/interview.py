# models/interview.py

from datetime import date, datetime
from typing import Any, Dict, Literal

from pydantic import Field

from models.base import TIME_PATTERN, AuditedDocument, Form, combine_local

Status = Literal["pending", "completed"]


class Interview(AuditedDocument):
    person_interviewed: str
    interviewer: str
    purpose: str
    scheduled_date: datetime
    status: Status = "pending"

    def toggled_status(self) -> Status:
        return "completed" if self.status == "pending" else "pending"


class InterviewForm(Form):
    person_interviewed: str = Field(min_length=2)
    interviewer: str = Field(min_length=2)
    purpose: str = Field(min_length=3)
    scheduled_date: date
    scheduled_time: str = Field(pattern=TIME_PATTERN)
    status: Status = "pending"

    def to_document(self, tz: str) -> Dict[str, Any]:
        return {
            "personInterviewed": self.person_interviewed,
            "interviewer": self.interviewer,
            "purpose": self.purpose,
            "scheduledDate": combine_local(self.scheduled_date, self.scheduled_time, tz),
            "status": self.status,
        }
