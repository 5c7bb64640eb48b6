"""Exceptions raised by the service layer."""


class TokenError(Exception):
    """Base class for session token verification failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidTokenError(TokenError):
    """Raised when a token's signature is invalid, it has expired, or it is malformed."""


class InvalidPayloadError(TokenError):
    """
    Raised when a token verified but its payload lacks required identity fields.

    The signature check passed, so the token was minted with our secret, but it
    does not carry a usable ``{id, email, name}`` identity.
    """
