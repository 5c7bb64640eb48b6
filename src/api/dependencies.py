"""FastAPI dependencies for session resolution."""

from fastapi import HTTPException, Request, status

from src.config import get_settings
from src.schemas.auth import SessionIdentity
from src.services.auth import get_token_codec
from src.services.exceptions import TokenError


def get_request_token(request: Request) -> str | None:
    """Locate the session token on a request.

    The test header is only consulted when running under the test suite; every
    other environment reads the session cookie alone.
    """
    settings = get_settings()
    if settings.is_test:
        token = request.headers.get(settings.test_token_header)
        if token:
            return token
    return request.cookies.get(settings.cookie_name) or None


def resolve_identity(request: Request) -> SessionIdentity | None:
    """Return the authenticated identity, or None for a missing or bad token."""
    token = get_request_token(request)
    if not token:
        return None
    try:
        return get_token_codec().verify(token)
    except TokenError:
        return None


def get_current_identity(request: Request) -> SessionIdentity:
    """Get the current identity from the session token, rejecting if absent or invalid."""
    identity = resolve_identity(request)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return identity
