from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, computed_field, field_validator

from app.models.base import EntityModel, utcnow


class Message(EntityModel):
    sender_id: UUID
    receiver_id: UUID
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    is_read: bool = False


class Conversation(EntityModel):
    participants: List[UUID]
    messages: List[Message] = []
    last_message_timestamp: datetime = Field(default_factory=utcnow)

    @field_validator("participants")
    @classmethod
    def check_pair(cls, value: List[UUID]) -> List[UUID]:
        if len(value) != 2 or value[0] == value[1]:
            raise ValueError("a conversation needs exactly two distinct participants")
        return value

    @computed_field
    @property
    def last_message(self) -> Optional[str]:
        return self.messages[-1].content if self.messages else None

    def connects(self, user_a: UUID, user_b: UUID) -> bool:
        return set(self.participants) == {user_a, user_b}

    def other_participant(self, user_id: UUID) -> Optional[UUID]:
        if user_id not in self.participants:
            return None
        return next(p for p in self.participants if p != user_id)
