# models/log_entry.py

from datetime import datetime
from typing import Literal

from models.base import Document

Action = Literal["create", "update", "delete", "login"]


class LogEntry(Document):
    user_id: str
    action: Action
    entity: str
    entity_id: str
    details: str = ""
    timestamp: datetime
