"""Schema module for API request/response models."""

from character_api.schemas.character import (
    CharacterCreatedResponse,
    CharacterResponse,
    ErrorResponse,
)

__all__ = ["CharacterCreatedResponse", "CharacterResponse", "ErrorResponse"]
