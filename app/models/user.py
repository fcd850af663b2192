from enum import Enum

from pydantic import AliasChoices, Field

from app.models.base import EntityModel


class UserRole(str, Enum):
    FARMER = "farmer"
    CONSUMER = "consumer"

    @classmethod
    def _missing_(cls, value):
        # Accept "Farmer" / "Consumer" as written by the mobile client
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class User(EntityModel):
    email: str
    name: str
    role: UserRole = Field(..., frozen=True, validation_alias=AliasChoices("role", "userType"))
    location: str
    phone: str = ""
    bio: str = ""
    profile_image_name: str = Field("person.circle", description="Avatar tag")
