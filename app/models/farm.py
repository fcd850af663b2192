from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.models.base import Coordinates, EntityModel


class MeatOffering(EntityModel):
    type: str
    price: float = Field(..., ge=0)
    unit: str = Field(..., description='e.g. "per pound", "per package"')
    description: str = ""
    available: bool = True


class Farm(EntityModel):
    owner_id: UUID
    name: str
    location: str
    coordinates: Optional[Coordinates] = None
    description: str = ""
    meat_offerings: List[MeatOffering] = []
    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    delivery_available: bool = False
    pickup_available: bool = True
    image_name: str = "farm"

    def offers_type(self, meat_types) -> bool:
        return any(offering.type in meat_types for offering in self.meat_offerings)

    def matches_text(self, text: str) -> bool:
        needle = text.lower()
        return (
            needle in self.name.lower()
            or needle in self.location.lower()
            or any(needle in offering.type.lower() for offering in self.meat_offerings)
        )
