"""Bookmark schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.schemas.validators import require_value, validate_absolute_url

camel_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class BookmarkCreate(BaseModel):
    """Create a new bookmark."""

    model_config = camel_config

    url: str = Field(..., max_length=2048)
    title: str = Field(..., max_length=500)
    description: str | None = None
    is_public: bool = False

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        return validate_absolute_url(v)

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return require_value(v)


class BookmarkUpdate(BaseModel):
    """
    Partial bookmark update.

    Only fields present in the request body are applied. ``url`` is not part of
    this schema, so a submitted URL is ignored.
    """

    model_config = camel_config

    title: str | None = Field(None, max_length=500)
    description: str | None = None
    is_public: bool | None = None
    is_read: bool | None = None

    # Validators only run on values the client actually sent.
    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Title cannot be null")
        if not v:
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("is_public", "is_read")
    @classmethod
    def check_flag(cls, v: bool | None) -> bool:
        if v is None:
            raise ValueError("Flags cannot be null")
        return v


class BookmarkResponse(BaseModel):
    """Bookmark response."""

    model_config = camel_config

    id: int
    user_id: int
    url: str
    title: str
    description: str | None
    is_public: bool
    is_read: bool
    created_at: datetime
    updated_at: datetime


class BookmarkOwner(BaseModel):
    """Public view of a bookmark's owner."""

    model_config = camel_config

    id: int
    name: str


class PublicBookmarkResponse(BookmarkResponse):
    """Bookmark in the public listing, with its owner."""

    user: BookmarkOwner


class BookmarkEnvelope(BaseModel):
    """A single bookmark wrapped under a `bookmark` key."""

    bookmark: BookmarkResponse


class BookmarkListResponse(BaseModel):
    """The current user's bookmarks."""

    bookmarks: list[BookmarkResponse]


class Pagination(BaseModel):
    """Pagination metadata with 1-based pages."""

    model_config = camel_config

    page: int
    limit: int
    total: int
    total_pages: int


class PublicBookmarkListResponse(BaseModel):
    """A page of public bookmarks."""

    bookmarks: list[PublicBookmarkResponse]
    pagination: Pagination
