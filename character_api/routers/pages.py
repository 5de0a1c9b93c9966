"""Server-rendered character pages.

Provides endpoints for:
- GET /index - Welcome page
- GET /list - Page listing every character
- GET /new - Character creation form
- POST /new - Store the submitted form and redirect to /list

The form submission is not validated: id and level are converted to
numbers and the record is appended even when it duplicates another
character or has an out-of-range level. Only urlencoded bodies are
read; any other body is treated as an empty submission.
"""

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from character_api.dependencies import get_character_store
from character_api.schemas.character import finite_or_none
from character_api.services.character_store import (
    MISSING,
    CharacterStore,
    to_number,
)
from character_api.utils.logging import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def form_number(value: Any) -> int | float:
    """Convert a submitted form value to a number.

    A missing field, or anything that is not text, becomes NaN.
    """
    return to_number(value if isinstance(value, str) else MISSING)


async def read_form_fields(request: Request) -> dict[str, str]:
    """Return the text fields of a urlencoded body, or {} for any other body."""
    media_type = request.headers.get("content-type", "").split(";")[0].strip()
    if media_type.lower() != FORM_MEDIA_TYPE:
        return {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.get("/index", response_class=HTMLResponse)
async def index_page(request: Request) -> HTMLResponse:
    """Render the welcome page."""
    return templates.TemplateResponse(request, "index.html", {"title": "Welcome"})


@router.get("/list", response_class=HTMLResponse)
async def list_page(
    request: Request,
    store: CharacterStore = Depends(get_character_store),
) -> HTMLResponse:
    """Render every character in collection order."""
    characters = [
        {key: finite_or_none(value) for key, value in character.items()}
        for character in store.list_characters()
    ]
    return templates.TemplateResponse(
        request,
        "list.html",
        {"title": "Character list", "characters": characters},
    )


@router.get("/new", response_class=HTMLResponse)
async def new_page(request: Request) -> HTMLResponse:
    """Render the character creation form."""
    return templates.TemplateResponse(request, "new.html", {"title": "New character"})


@router.post("/new")
async def submit_new_character(
    request: Request,
    store: CharacterStore = Depends(get_character_store),
) -> RedirectResponse:
    """Append the submitted character without validation and go to /list.

    Blank inputs are kept as empty strings; fields left out of the
    submission entirely stay absent from the record.
    """
    form = await read_form_fields(request)
    record: dict[str, Any] = {
        "id": form_number(form.get("id")),
        "level": form_number(form.get("level")),
    }
    for name in ("name", "job", "weapon"):
        if name in form:
            record[name] = form[name]

    store.append_unchecked(record)
    logger.info(f"Stored character id={record['id']!r} from form submission")

    return RedirectResponse(url="/list", status_code=status.HTTP_302_FOUND)
