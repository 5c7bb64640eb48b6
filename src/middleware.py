"""Route gate redirecting page requests by session state."""

import logging

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.config import Settings, get_settings
from src.services.auth import TokenCodec, get_token_codec
from src.services.exceptions import TokenError

logger = logging.getLogger(__name__)


def matches_prefix(path: str, prefixes: list[str]) -> bool:
    """Check whether a path equals a prefix or sits below it."""
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


class RouteGateMiddleware(BaseHTTPMiddleware):
    """Coarse page-level gate.

    Signed-in users asking for the login or register pages are sent home, and
    anyone without a valid session asking for a protected page is sent to
    login. Everything else passes through. API endpoints still check the
    session themselves; the gate verifies the cookie independently.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: Settings | None = None,
        codec: TokenCodec | None = None,
    ) -> None:
        super().__init__(app)
        self.settings = settings or get_settings()
        self.codec = codec or get_token_codec()

    def has_valid_session(self, request: Request) -> bool:
        token = request.cookies.get(self.settings.cookie_name)
        if not token:
            return False
        try:
            self.codec.verify(token)
        except TokenError as e:
            logger.debug(f"Route gate rejected token: {e}")
            return False
        return True

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Redirect between auth pages and protected pages based on the session."""
        path = request.url.path
        is_auth_page = matches_prefix(path, self.settings.auth_page_prefixes)
        is_protected_page = matches_prefix(path, self.settings.protected_page_prefixes)

        if is_auth_page or is_protected_page:
            authenticated = self.has_valid_session(request)
            if is_auth_page and authenticated:
                return RedirectResponse(url=self.settings.home_path)
            if is_protected_page and not authenticated:
                return RedirectResponse(url=self.settings.login_path)

        return await call_next(request)
