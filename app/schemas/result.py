from typing import Any, Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from app.core.errors import ErrorKind

T = TypeVar("T")


class Notification(BaseModel):
    title: str
    body: str
    recipient_id: Optional[UUID] = None


class StoreEvent(BaseModel):
    """Published to store subscribers after a mutation commits."""

    name: str
    entity_id: Optional[UUID] = None


class CommandResult(BaseModel, Generic[T]):
    ok: bool = True
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    detail: Optional[str] = None
    notifications: List[Notification] = []
    events: List[StoreEvent] = []

    @classmethod
    def failure(cls, error: ErrorKind, detail: str) -> "CommandResult[Any]":
        return cls(ok=False, error=error, detail=detail)
