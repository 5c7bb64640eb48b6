"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    MessageResponse,
    SessionIdentity,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.bookmark import (
    BookmarkCreate,
    BookmarkEnvelope,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
    Pagination,
    PublicBookmarkListResponse,
    PublicBookmarkResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "SessionIdentity",
    "UserResponse",
    "AuthResponse",
    "MessageResponse",
    "BookmarkCreate",
    "BookmarkUpdate",
    "BookmarkResponse",
    "BookmarkEnvelope",
    "BookmarkListResponse",
    "Pagination",
    "PublicBookmarkResponse",
    "PublicBookmarkListResponse",
]
