"""Reusable field validators for request schemas."""

import re

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_EMAIL_MESSAGE = "Invalid email address"
INVALID_URL_MESSAGE = "Invalid URL"

# Exactly one "@", no whitespace, and a "." somewhere in the domain part.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_url_adapter = TypeAdapter(AnyUrl)


def require_value(value: str) -> str:
    """
    Reject empty strings for required fields.

    Raises:
        ValueError: If the value is empty.
    """
    if not value:
        raise ValueError(MISSING_FIELDS_MESSAGE)
    return value


def validate_email_address(email: str) -> str:
    """
    Validate an email address syntactically.

    Args:
        email: The raw email string.

    Returns:
        The email unchanged.

    Raises:
        ValueError: If the email is empty or malformed.
    """
    require_value(email)
    if not EMAIL_PATTERN.match(email):
        raise ValueError(INVALID_EMAIL_MESSAGE)
    return email


def validate_absolute_url(url: str) -> str:
    """
    Validate that a string is an absolute URL with a scheme.

    The submitted string is returned as-is; pydantic's parsed form is only used
    for the check.

    Raises:
        ValueError: If the URL is empty or cannot be parsed as an absolute URL.
    """
    require_value(url)
    try:
        _url_adapter.validate_python(url)
    except PydanticValidationError as e:
        raise ValueError(INVALID_URL_MESSAGE) from e
    return url
