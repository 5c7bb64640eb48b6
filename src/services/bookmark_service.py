"""Bookmark storage operations.

Every record-scoped lookup filters by both bookmark id and owner id, so a
bookmark owned by someone else is indistinguishable from one that does not exist.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Query, Session, joinedload

from src.models.bookmark import Bookmark
from src.schemas.bookmark import BookmarkCreate, BookmarkUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublicBookmarkFilter:
    """Filters for the public listing. ``is_public`` is always enforced."""

    query: str | None = None
    user_id: int | None = None


def get_user_bookmark(db: Session, bookmark_id: int, user_id: int) -> Bookmark | None:
    """Get a bookmark only if it belongs to the given user."""
    return (
        db.query(Bookmark)
        .filter(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
        .first()
    )


def list_user_bookmarks(db: Session, user_id: int) -> list[Bookmark]:
    """Get all of a user's bookmarks, newest first."""
    return (
        db.query(Bookmark)
        .filter(Bookmark.user_id == user_id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .all()
    )


def create_bookmark(db: Session, user_id: int, data: BookmarkCreate) -> Bookmark:
    """Create a bookmark owned by the given user. New bookmarks start unread."""
    bookmark = Bookmark(
        user_id=user_id,
        url=data.url,
        title=data.title,
        description=data.description,
        is_public=data.is_public,
        is_read=False,
    )
    db.add(bookmark)
    db.commit()
    db.refresh(bookmark)
    logger.info(f"User {user_id} created bookmark {bookmark.id}")
    return bookmark


def update_bookmark(db: Session, bookmark: Bookmark, data: BookmarkUpdate) -> Bookmark:
    """Apply the fields present in ``data`` to an already ownership-checked bookmark."""
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(bookmark, field, value)
    db.commit()
    db.refresh(bookmark)
    return bookmark


def delete_bookmark(db: Session, bookmark: Bookmark) -> None:
    """Delete an already ownership-checked bookmark."""
    bookmark_id, user_id = bookmark.id, bookmark.user_id
    db.delete(bookmark)
    db.commit()
    logger.info(f"User {user_id} deleted bookmark {bookmark_id}")


def _public_bookmarks_query(db: Session, filters: PublicBookmarkFilter) -> Query:
    query = db.query(Bookmark).filter(Bookmark.is_public.is_(True))
    if filters.query:
        query = query.filter(
            Bookmark.title.contains(filters.query, autoescape=True)
            | Bookmark.description.contains(filters.query, autoescape=True)
        )
    if filters.user_id is not None:
        query = query.filter(Bookmark.user_id == filters.user_id)
    return query


def count_bookmarks(db: Session, filters: PublicBookmarkFilter) -> int:
    """Count public bookmarks matching the filters."""
    return _public_bookmarks_query(db, filters).count()


def list_bookmarks(
    db: Session, filters: PublicBookmarkFilter, offset: int, limit: int
) -> list[Bookmark]:
    """Get a page of public bookmarks matching the filters, newest first, with owners."""
    return (
        _public_bookmarks_query(db, filters)
        .options(joinedload(Bookmark.user))
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
