# models/user.py

from typing import Literal, Optional

from pydantic import EmailStr, Field

from models.base import AuditedDocument, Form

UserRole = Literal["administrator", "bishop", "counselor", "secretary"]


class UserProfile(AuditedDocument):
    """Profile of an authenticated account. The document id is the auth uid."""

    email: str
    name: str
    role: UserRole
    is_active: bool = True

    @property
    def uid(self) -> Optional[str]:
        return self.id


class UserForm(Form):
    uid: str = Field(min_length=1)
    name: str = Field(min_length=2)
    email: EmailStr
    role: UserRole = "secretary"


class ProfileUpdate(Form):
    name: Optional[str] = Field(default=None, min_length=2)
    role: Optional[UserRole] = None
