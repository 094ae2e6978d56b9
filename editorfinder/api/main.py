"""FastAPI application entry point for Editor Finder.

Every route answers with the ``{data, success, error?, timestamp}`` envelope.
Domain errors carry their own status code and are converted here.
"""

import logging

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from editorfinder.api.cleanup import router as cleanup_router
from editorfinder.api.dependencies import get_store
from editorfinder.api.editors import router as editors_router
from editorfinder.api.envelope import error_response
from editorfinder.api.knowledge import router as knowledge_router
from editorfinder.api.research import router as research_router
from editorfinder.api.sync import router as sync_router
from editorfinder.config.settings import get_settings
from editorfinder.errors import EditorFinderError, StoreIOError
from editorfinder.models.common import Collections
from editorfinder.store.base import DocumentStore

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "dev"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)
logging.basicConfig(level=_LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# --- FastAPI app ---
app = FastAPI(
    title="Editor Finder API",
    description="Directory of television editors with knowledge profiles.",
    version=APP_VERSION,
)

# --- CORS middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ENVIRONMENT == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelopes ---


@app.exception_handler(EditorFinderError)
async def editor_finder_error_handler(
    request: Request, exc: EditorFinderError,
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed", path=request.url.path, error=exc.error, detail=exc.message,
        )
    return error_response(exc.status_code, exc.error, exc.data_message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return error_response(500, "Internal error", str(exc) or type(exc).__name__)


# --- Routers ---
app.include_router(knowledge_router)
app.include_router(sync_router)
app.include_router(research_router)
app.include_router(editors_router)
app.include_router(cleanup_router)


# --- Infrastructure Endpoints ---


@app.get("/health")
async def health_check(store: DocumentStore = Depends(get_store)) -> dict:
    """Liveness probe with a document store check.

    Returns 200 always (degraded status if the store is unreachable).
    """
    checks: dict[str, bool] = {"api": True}

    try:
        await store.query(Collections.EDITORS, {}, limit=1)
        checks["store"] = True
    except StoreIOError:
        checks["store"] = False

    all_ok = all(checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "checks": checks,
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "Editor Finder",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
