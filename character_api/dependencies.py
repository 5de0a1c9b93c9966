"""Shared FastAPI dependencies.

- get_character_store: the store owned by the running application
- get_character_payload: JSON request body as a dict
"""

import json
from typing import Any

from fastapi import HTTPException, Request, status

from character_api.services.character_store import CharacterStore

MALFORMED_JSON_ERROR = "Malformed JSON body"


def get_character_store(request: Request) -> CharacterStore:
    """Return the CharacterStore attached to the application state."""
    return request.app.state.character_store


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}")


async def get_character_payload(request: Request) -> dict[str, Any]:
    """Read the request body as a JSON object.

    A missing body, a non-JSON content type or a JSON scalar yield an
    empty dict, which the store reports as an empty body. A JSON array
    becomes a dict keyed by index, so a non-empty array passes the empty
    check but carries no character fields.

    Raises:
        HTTPException 400: If the body is declared JSON but cannot be decoded
    """
    media_type = request.headers.get("content-type", "").split(";")[0].strip()
    if media_type.lower() != "application/json":
        return {}

    body = await request.body()
    if not body.strip():
        return {}

    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": MALFORMED_JSON_ERROR},
        ) from e

    if isinstance(payload, list):
        # An array's keys are its indexes; none of them is a character field
        return {str(index): item for index, item in enumerate(payload)}
    if not isinstance(payload, dict):
        return {}
    return payload
