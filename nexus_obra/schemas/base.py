"""Shared pydantic base models and field types."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nexus_obra.shared.utils.generators import is_valid_id_format


def _check_id(value: str) -> str:
    if not is_valid_id_format(value):
        raise ValueError("must be a valid id")
    return value


# Reference to another record by id (userId, clientId, clientAdmin, responsibleUsers).
EntityId = Annotated[str, AfterValidator(_check_id)]


class CamelModel(BaseModel):
    """Response model: snake_case attributes, camelCase JSON, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Request body: unknown keys are rejected (400 before any handler logic runs)."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(BaseModel):
    message: str
