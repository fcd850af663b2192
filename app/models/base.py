from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Records may use snake_case or the mobile client's camelCase keys
# ("ownerId", "meatOfferings", "isOpen"). Output stays snake_case.
ACCEPT_CAMEL_CASE = AliasGenerator(
    validation_alias=lambda name: AliasChoices(name, to_camel(name)),
)


class EntityModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        alias_generator=ACCEPT_CAMEL_CASE,
        populate_by_name=True,
    )

    id: UUID = Field(default_factory=uuid4)


class Coordinates(BaseModel):
    model_config = ConfigDict(alias_generator=ACCEPT_CAMEL_CASE, populate_by_name=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
