"""Services package for business logic."""

from character_api.services.character_store import (
    CharacterError,
    CharacterStore,
)

__all__ = ["CharacterError", "CharacterStore"]
