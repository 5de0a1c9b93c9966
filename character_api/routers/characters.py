"""Character CRUD API endpoints.

Provides endpoints for:
- GET /characters - List all characters in collection order
- GET /characters/{id} - Get one character
- POST /characters - Create a character (validated)
- PUT /characters/{id} - Replace a character (validated, full replace)
- DELETE /characters/{id} - Delete a character

Path ids are taken as strings and converted by the store, so a
non-numeric id is simply not found.
"""

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Response, status

from character_api.dependencies import get_character_payload, get_character_store
from character_api.schemas.character import (
    CharacterCreatedResponse,
    CharacterResponse,
    ErrorResponse,
)
from character_api.services.character_store import CharacterError, CharacterStore
from character_api.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Error mapping: CharacterError -> HTTP status code
CHARACTER_ERROR_MAP: dict[CharacterError, int] = {
    CharacterError.BODY_EMPTY: status.HTTP_400_BAD_REQUEST,
    CharacterError.DUPLICATE: status.HTTP_400_BAD_REQUEST,
    CharacterError.LEVEL_OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    CharacterError.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CharacterError.DOES_NOT_EXIST: status.HTTP_404_NOT_FOUND,
}

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


def raise_character_error(error: CharacterError, character_id: Any = None) -> NoReturn:
    """Raise the HTTPException matching a CharacterError."""
    status_code = CHARACTER_ERROR_MAP.get(
        error, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    logger.warning(
        f"Character request rejected (id={character_id!r}): {error.value}"
    )
    raise HTTPException(status_code=status_code, detail={"error": error.value})


@router.get(
    "/characters",
    response_model=list[CharacterResponse],
    response_model_exclude_unset=True,
)
async def list_characters(
    store: CharacterStore = Depends(get_character_store),
) -> list[CharacterResponse]:
    """Return all characters in insertion order."""
    return [CharacterResponse(**c) for c in store.list_characters()]


@router.get(
    "/characters/{character_id}",
    response_model=CharacterResponse,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
async def get_character(
    character_id: str,
    store: CharacterStore = Depends(get_character_store),
) -> CharacterResponse:
    """Return one character.

    Raises:
        HTTPException 404: If no character has this id
    """
    result = store.get_character(character_id)
    if result.is_err():
        raise_character_error(result.unwrap_err(), character_id)

    return CharacterResponse(**result.unwrap())


@router.post(
    "/characters",
    response_model=CharacterCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_character(
    payload: dict[str, Any] = Depends(get_character_payload),
    store: CharacterStore = Depends(get_character_store),
) -> CharacterCreatedResponse:
    """Create a character from the JSON body.

    Raises:
        HTTPException 400: If the body is empty, the id or name is already
            taken, or the level is outside 1-99
    """
    result = store.create_character(payload)
    if result.is_err():
        raise_character_error(result.unwrap_err(), payload.get("id"))

    return CharacterCreatedResponse(message="Character created")


@router.put(
    "/characters/{character_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
)
async def replace_character(
    character_id: str,
    payload: dict[str, Any] = Depends(get_character_payload),
    store: CharacterStore = Depends(get_character_store),
) -> Response:
    """Replace every field of a character with the JSON body.

    Raises:
        HTTPException 400: If the body is empty, another character already
            has the new id or name, or the level is outside 1-99
        HTTPException 404: If no character has this id
    """
    result = store.replace_character(character_id, payload)
    if result.is_err():
        raise_character_error(result.unwrap_err(), character_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/characters/{character_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
)
async def delete_character(
    character_id: str,
    store: CharacterStore = Depends(get_character_store),
) -> Response:
    """Delete a character.

    Raises:
        HTTPException 404: If no character has this id
    """
    result = store.delete_character(character_id)
    if result.is_err():
        raise_character_error(result.unwrap_err(), character_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
