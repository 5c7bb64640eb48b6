"""Public bookmark listing tests."""

import pytest

from src.models.bookmark import Bookmark


@pytest.fixture
def add_bookmark(db):
    """Insert a bookmark directly, bypassing the API."""

    def _add(user_id: int, title: str, description: str | None = None, is_public: bool = True):
        bookmark = Bookmark(
            user_id=user_id,
            url=f"https://example.com/{title.replace(' ', '-')}",
            title=title,
            description=description,
            is_public=is_public,
        )
        db.add(bookmark)
        db.commit()
        return bookmark

    return _add


def titles(response) -> set[str]:
    return {b["title"] for b in response.json()["bookmarks"]}


def test_public_listing_needs_no_auth(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Shared")
    response = client.get("/api/bookmarks/public")
    assert response.status_code == 200
    assert titles(response) == {"Shared"}


def test_private_bookmarks_never_listed(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Shared")
    add_bookmark(auth_headers.user_id, "Secret", is_public=False)
    add_bookmark(auth_headers.user_id, "Also secret", description="Shared", is_public=False)

    response = client.get("/api/bookmarks/public", params={"q": "Shared"})
    assert titles(response) == {"Shared"}
    assert response.json()["pagination"]["total"] == 1


def test_private_bookmarks_hidden_from_owner_too(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Secret", is_public=False)
    response = client.get("/api/bookmarks/public", headers=auth_headers)
    assert response.json()["bookmarks"] == []


def test_keyword_matches_title_or_description(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Learning Python")
    add_bookmark(auth_headers.user_id, "Snakes", description="All about Python")
    add_bookmark(auth_headers.user_id, "Rust book", description="Systems")

    response = client.get("/api/bookmarks/public", params={"q": "Python"})
    assert titles(response) == {"Learning Python", "Snakes"}


def test_keyword_is_case_sensitive(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Learning Python")
    response = client.get("/api/bookmarks/public", params={"q": "python"})
    assert response.json()["bookmarks"] == []


def test_keyword_wildcards_are_literal(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "100% coverage")
    add_bookmark(auth_headers.user_id, "Plain title")
    response = client.get("/api/bookmarks/public", params={"q": "%"})
    assert titles(response) == {"100% coverage"}


def test_owner_filter(client, auth_headers, other_auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Mine")
    add_bookmark(other_auth_headers.user_id, "Theirs")

    response = client.get("/api/bookmarks/public", params={"userId": other_auth_headers.user_id})
    assert titles(response) == {"Theirs"}


def test_keyword_and_owner_filters_combine(client, auth_headers, other_auth_headers, add_bookmark):
    """Both filters must match."""
    add_bookmark(auth_headers.user_id, "Python tips")
    add_bookmark(auth_headers.user_id, "Gardening")
    add_bookmark(other_auth_headers.user_id, "Python tricks")

    response = client.get(
        "/api/bookmarks/public", params={"q": "Python", "userId": auth_headers.user_id}
    )
    assert titles(response) == {"Python tips"}
    assert response.json()["pagination"]["total"] == 1


def test_listing_includes_owner_without_email(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Shared")
    bookmark = client.get("/api/bookmarks/public").json()["bookmarks"][0]
    assert bookmark["user"] == {"id": auth_headers.user_id, "name": "Test User"}
    assert bookmark["userId"] == auth_headers.user_id


def test_pagination(client, auth_headers, add_bookmark):
    """23 rows with limit 10 gives pages of 10, 10 and 3."""
    for i in range(23):
        add_bookmark(auth_headers.user_id, f"Bookmark {i}")

    page1 = client.get("/api/bookmarks/public", params={"page": 1, "limit": 10}).json()
    page2 = client.get("/api/bookmarks/public", params={"page": 2, "limit": 10}).json()
    page3 = client.get("/api/bookmarks/public", params={"page": 3, "limit": 10}).json()

    assert len(page1["bookmarks"]) == 10
    assert len(page2["bookmarks"]) == 10
    assert len(page3["bookmarks"]) == 3
    assert page1["pagination"] == {"page": 1, "limit": 10, "total": 23, "totalPages": 3}
    assert page2["pagination"]["page"] == 2

    all_ids = [b["id"] for page in (page1, page2, page3) for b in page["bookmarks"]]
    assert len(set(all_ids)) == 23
    # Newest first
    assert all_ids == sorted(all_ids, reverse=True)


def test_pagination_defaults(client):
    response = client.get("/api/bookmarks/public")
    assert response.json()["pagination"] == {
        "page": 1,
        "limit": 20,
        "total": 0,
        "totalPages": 0,
    }


def test_page_past_end_is_empty(client, auth_headers, add_bookmark):
    add_bookmark(auth_headers.user_id, "Only one")
    response = client.get("/api/bookmarks/public", params={"page": 5})
    assert response.status_code == 200
    assert response.json()["bookmarks"] == []
    assert response.json()["pagination"]["total"] == 1


@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "abc"}, {"userId": "abc"}],
)
def test_invalid_pagination_params(client, params):
    response = client.get("/api/bookmarks/public", params=params)
    assert response.status_code == 400
