from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.models.base import Coordinates, EntityModel, utcnow


class DeliveryOption(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"
    EITHER = "either"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class RequestResponse(EntityModel):
    """A farmer's offer on a request. Never edited once recorded."""

    farmer_id: UUID
    farmer_name: str
    offer_amount: float = Field(..., ge=0)
    message: str = ""
    timestamp: datetime = Field(default_factory=utcnow)


class Request(EntityModel):
    consumer_id: UUID
    consumer_name: str
    meat_type: str
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., description='e.g. "pounds", "kg"')
    budget: float = Field(..., ge=0)
    delivery_option: DeliveryOption
    preferred_time: datetime
    location: str
    coordinates: Optional[Coordinates] = None
    additional_info: str = ""
    date_posted: datetime = Field(default_factory=utcnow)
    is_open: bool = True
    # Offer history, oldest first
    responses: List[RequestResponse] = []
