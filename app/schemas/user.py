from typing import Optional

from pydantic import Field

from app.models.user import UserRole
from app.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    email: str = Field(..., min_length=1)
    role: UserRole


class ProfileUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
