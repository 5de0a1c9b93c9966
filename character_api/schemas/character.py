"""Character schemas for API requests and responses."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer


def finite_or_none(value: Any) -> Any:
    """Return None for NaN and infinite floats, the value otherwise.

    Form submissions can store non-numeric ids and levels as NaN; JSON
    has no NaN, so they are sent as null.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class CharacterResponse(BaseModel):
    """Response model for a single character.

    Values are passed through exactly as stored, so fields are untyped.
    Routes serialise with ``response_model_exclude_unset=True`` so that a
    field the record never carried is left out rather than sent as null.
    """

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    name: Any = None
    job: Any = None
    weapon: Any = None
    level: Any = None

    @field_serializer("id", "name", "job", "weapon", "level")
    def serialize_finite(self, value: Any) -> Any:
        """Send NaN and infinite numbers as null."""
        return finite_or_none(value)


class CharacterCreatedResponse(BaseModel):
    """Response model for POST /characters endpoint."""

    message: str


class ErrorResponse(BaseModel):
    """Error body returned by the /characters endpoints."""

    error: str
