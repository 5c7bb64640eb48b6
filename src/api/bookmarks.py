"""Bookmark API endpoints."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.models.bookmark import Bookmark
from src.schemas.auth import MessageResponse, SessionIdentity
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
from src.services import bookmark_service
from src.services.bookmark_service import PublicBookmarkFilter

router = APIRouter(prefix="/api/bookmarks", tags=["bookmarks"])


def get_owned_bookmark(db: Session, bookmark_id: int, identity: SessionIdentity) -> Bookmark:
    """Get a bookmark the current user owns; anyone else's bookmark is reported as missing."""
    bookmark = bookmark_service.get_user_bookmark(db, bookmark_id, identity.id)
    if bookmark is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bookmark not found")
    return bookmark


@router.get("", response_model=BookmarkListResponse)
async def get_bookmarks(
    identity: Annotated[SessionIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the current user's bookmarks, newest first."""
    bookmarks = bookmark_service.list_user_bookmarks(db, identity.id)
    return BookmarkListResponse(
        bookmarks=[BookmarkResponse.model_validate(b) for b in bookmarks],
    )


@router.post("", response_model=BookmarkEnvelope, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark_data: BookmarkCreate,
    identity: Annotated[SessionIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new bookmark."""
    bookmark = bookmark_service.create_bookmark(db, identity.id, bookmark_data)
    return BookmarkEnvelope(bookmark=BookmarkResponse.model_validate(bookmark))


@router.get("/public", response_model=PublicBookmarkListResponse)
async def get_public_bookmarks(
    db: Annotated[Session, Depends(get_db)],
    q: Annotated[
        str | None, Query(description="Case-sensitive substring of title or description")
    ] = None,
    user_id: Annotated[int | None, Query(alias="userId", description="Owner id")] = None,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 20,
):
    """Search public bookmarks. No authentication required."""
    filters = PublicBookmarkFilter(query=q or None, user_id=user_id)

    total = bookmark_service.count_bookmarks(db, filters)
    bookmarks = bookmark_service.list_bookmarks(
        db, filters, offset=(page - 1) * limit, limit=limit
    )

    return PublicBookmarkListResponse(
        bookmarks=[PublicBookmarkResponse.model_validate(b) for b in bookmarks],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        ),
    )


@router.get("/{bookmark_id}", response_model=BookmarkEnvelope)
async def get_bookmark(
    bookmark_id: int,
    identity: Annotated[SessionIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific bookmark."""
    bookmark = get_owned_bookmark(db, bookmark_id, identity)
    return BookmarkEnvelope(bookmark=BookmarkResponse.model_validate(bookmark))


@router.put("/{bookmark_id}", response_model=BookmarkEnvelope)
async def update_bookmark(
    bookmark_id: int,
    bookmark_data: BookmarkUpdate,
    identity: Annotated[SessionIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a bookmark's title, description, or flags. The URL cannot be changed."""
    bookmark = get_owned_bookmark(db, bookmark_id, identity)
    bookmark = bookmark_service.update_bookmark(db, bookmark, bookmark_data)
    return BookmarkEnvelope(bookmark=BookmarkResponse.model_validate(bookmark))


@router.delete("/{bookmark_id}", response_model=MessageResponse)
async def delete_bookmark(
    bookmark_id: int,
    identity: Annotated[SessionIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a bookmark."""
    bookmark = get_owned_bookmark(db, bookmark_id, identity)
    bookmark_service.delete_bookmark(db, bookmark)
    return MessageResponse(message="Bookmark deleted")
