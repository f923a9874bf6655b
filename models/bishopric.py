# models/bishopric.py

from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import Field

from models.base import AuditedDocument, Form, start_of_day


class BishopricMeeting(AuditedDocument):
    date: datetime


class Note(AuditedDocument):
    date: datetime
    content: str
    meeting_id: Optional[str] = None  # derived from the path on read, never stored


class NoteForm(Form):
    date: date
    content: str = Field(min_length=10)

    def to_document(self, tz: str) -> Dict[str, Any]:
        return {"date": start_of_day(self.date, tz), "content": self.content}
