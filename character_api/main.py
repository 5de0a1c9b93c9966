"""FastAPI application entry point."""

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response

from character_api.config import get_settings
from character_api.routers.characters import router as characters_router
from character_api.routers.pages import router as pages_router
from character_api.services.character_store import CharacterStore
from character_api.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def error_body_exception_handler(
    request: Request, exc: HTTPException
) -> Response:
    """Send ``{"error": ...}`` details as the top-level response body.

    HTTPExceptions with any other detail keep FastAPI's default
    ``{"detail": ...}`` shape.
    """
    if isinstance(exc.detail, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers,
        )
    return await http_exception_handler(request, exc)


def create_app(store: CharacterStore | None = None) -> FastAPI:
    """Create and configure the application.

    Each call gets its own store, seeded with the starting characters
    unless ``store`` is given.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.character_store = store if store is not None else CharacterStore()

    app.add_exception_handler(HTTPException, error_body_exception_handler)

    # Include routers
    app.include_router(characters_router)
    app.include_router(pages_router)

    @app.get("/")
    async def root() -> dict:
        """Return application information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Configure logging (must be called before other modules use loggers)
configure_logging(get_settings().log_level)

app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    logger.info(f"Server running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
