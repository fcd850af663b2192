from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema


class MessageCreate(BaseSchema):
    receiver_id: UUID
    content: str = Field(..., min_length=1)
