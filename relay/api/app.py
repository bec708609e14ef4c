"""FastAPI application factory.

Settings
--------
``create_app`` takes an explicit :class:`~relay.config.Settings`; the
instance is stored on ``app.state.settings`` and read by every request.
Nothing is read from module globals at request time.

Error handling
--------------
Every error response has the shape ``{"error": "..."}``:

    ValidationError / RequestValidationError  → 400 with the message
    UpstreamError                             → 500, generic message only

Static files
------------
``GET /`` serves ``index.html`` and every other path falls through to the
static directory, mounted last so API routes win.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from relay.config import Settings
from relay.errors import UpstreamError, ValidationError
from relay.logging_config import configure_logging

from relay.api.routers import scrape as scrape_router

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE_MESSAGE = "Failed to fetch reviews from G2 API"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and report configuration problems on startup."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    if not settings.g2_api_token:
        logger.warning("G2_API_TOKEN is not set; every upstream call will be rejected.")
    if not settings.index_path.is_file():
        logger.warning("Static entry page not found at %s", settings.index_path)
    yield


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


async def _upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.error(
        "Error fetching reviews: status=%s body=%s detail=%s",
        exc.status_code,
        exc.body,
        exc,
    )
    return JSONResponse(status_code=500, content={"error": UPSTREAM_FAILURE_MESSAGE})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the relay app around *settings*, read fresh from the environment by default."""
    settings = settings or Settings()

    app = FastAPI(
        title="Review Relay",
        description=(
            "Fetches G2 reviews for a product slug or id and filters them "
            "by creation date."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # The entry page may be hosted elsewhere during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(UpstreamError, _upstream_error_handler)

    app.include_router(scrape_router.router, tags=["scrape"])

    @app.get("/", include_in_schema=False)
    def index() -> FileResponse:
        if not settings.index_path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(settings.index_path)

    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.static_dir)), name="static")

    return app


# Default app for running uvicorn directly:
#   uvicorn relay.api.app:app --port 3000
app = create_app()
