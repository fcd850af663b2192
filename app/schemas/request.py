from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.base import Coordinates
from app.models.request import DeliveryOption
from app.schemas.base import BaseSchema


class RequestCreate(BaseSchema):
    """Unsaved request draft. The store assigns id, owner and timestamps."""

    meat_type: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit: str = "pounds"
    budget: float = Field(..., ge=0)
    delivery_option: DeliveryOption = DeliveryOption.EITHER
    preferred_time: datetime
    location: str
    coordinates: Optional[Coordinates] = None
    additional_info: str = ""


class ResponseCreate(BaseSchema):
    offer_amount: float = Field(..., ge=0)
    message: str = ""


class AcceptResponse(BaseSchema):
    response_index: int
