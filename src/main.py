"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api import auth, bookmarks
from src.config import get_settings
from src.middleware import RouteGateMiddleware
from src.schemas.validators import MISSING_FIELDS_MESSAGE

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting bookmark API ({settings.environment})")
    yield


app = FastAPI(
    title="Bookmark Manager API",
    description="Personal and public bookmarks with cookie-based sessions",
    version="0.1.0",
    lifespan=lifespan,
)


def is_missing_value(error: dict) -> bool:
    """True for an absent, null or empty required field."""
    if error["type"] == "missing":
        return True
    if error["type"] == "string_type" and error.get("input", "") is None:
        return True
    ctx = error.get("ctx") or {}
    return error["type"] == "value_error" and str(ctx.get("error")) == MISSING_FIELDS_MESSAGE


def validation_error_message(exc: RequestValidationError) -> str:
    """Pick a single client-facing message for a failed request validation."""
    errors = exc.errors()
    if any(is_missing_value(error) for error in errors):
        return MISSING_FIELDS_MESSAGE
    for error in errors:
        if error["type"] == "json_invalid":
            return "Invalid JSON body"
        if error["type"] == "value_error" and "error" in error.get("ctx", {}):
            return str(error["ctx"]["error"])
    if errors:
        field = errors[0]["loc"][-1]
        return f"Invalid value for {field}"
    return "Invalid request"


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed requests as 400 with one readable message."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": validation_error_message(exc)},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Hide storage failures behind a generic 500."""
    logger.exception(f"Database error handling {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything the endpoints did not anticipate."""
    logger.exception(f"Unexpected error handling {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.add_middleware(RouteGateMiddleware)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(auth.router)
app.include_router(bookmarks.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
