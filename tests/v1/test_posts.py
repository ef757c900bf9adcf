# tests/v1/test_posts.py
"""Tests for post-related endpoints."""

from fastapi import status

from tests.conftest import make_post


def test_create_post_success(client, test_user, auth_token) -> None:
    """Test successful post creation."""
    response = client.post("/api/posts", json={"content": "hello"}, headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["content"] == "hello"
    assert data["likes"] == 0
    assert data["kind"] == "original"
    assert data["originalPost"] is None
    assert data["author"]["username"] == test_user.username
    assert data["author"]["displayName"] == test_user.display_name
    assert "passwordHash" not in data["author"]


def test_create_post_trims_content(client, auth_token) -> None:
    response = client.post("/api/posts", json={"content": "   spaced out   "}, headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["content"] == "spaced out"


def test_create_post_length_boundary(client, auth_token) -> None:
    """Exactly 280 characters is accepted; 281 is rejected."""
    ok = client.post("/api/posts", json={"content": "a" * 280}, headers=auth_token)
    assert ok.status_code == status.HTTP_201_CREATED

    too_long = client.post("/api/posts", json={"content": "a" * 281}, headers=auth_token)
    assert too_long.status_code == status.HTTP_400_BAD_REQUEST
    assert "280" in too_long.json()["error"]


def test_create_post_empty_content(client, auth_token) -> None:
    for content in ("", "    "):
        response = client.post("/api/posts", json={"content": content}, headers=auth_token)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Content is required"}


def test_create_post_missing_content_field(client, auth_token) -> None:
    response = client.post("/api/posts", json={}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_requires_token(client) -> None:
    response = client.post("/api/posts", json={"content": "hello"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert "error" in response.json()


def test_create_post_rejects_bad_token(client) -> None:
    response = client.post(
        "/api/posts",
        json={"content": "hello"},
        headers={"Authorization": "Bearer not.a.valid.jwt"},
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert "error" in response.json()


def test_list_posts_newest_first(client, db_session, test_user) -> None:
    first = make_post(db_session, test_user, "first")
    second = make_post(db_session, test_user, "second")

    response = client.get("/api/posts")
    assert response.status_code == status.HTTP_200_OK
    ids = [post["id"] for post in response.json()]
    assert ids == [second.id, first.id]


def test_list_posts_empty(client) -> None:
    response = client.get("/api/posts")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_repost_embeds_resolved_original(client, test_post, test_user, other_user, other_auth_token) -> None:
    response = client.post(f"/api/posts/{test_post.id}/repost", headers=other_auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()

    assert data["kind"] == "repost"
    assert data["content"] is None
    assert data["author"]["username"] == other_user.username
    assert data["originalPost"]["id"] == test_post.id
    assert data["originalPost"]["content"] == test_post.content
    assert data["originalPost"]["author"]["username"] == test_user.username


def test_repost_missing_original(client, other_auth_token) -> None:
    response = client.post("/api/posts/9999/repost", headers=other_auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "error" in response.json()


def test_repost_requires_token(client, test_post) -> None:
    response = client.post(f"/api/posts/{test_post.id}/repost")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_repost_resolves_consistently_in_feed(client, test_post, test_user, other_auth_token) -> None:
    repost_id = client.post(f"/api/posts/{test_post.id}/repost", headers=other_auth_token).json()["id"]

    for _ in range(3):
        feed = client.get("/api/posts").json()
        repost = next(post for post in feed if post["id"] == repost_id)
        assert repost["content"] is None
        assert repost["originalPost"]["content"] == test_post.content
        assert repost["originalPost"]["author"]["username"] == test_user.username
        assert repost["originalPost"]["createdAt"] == next(
            post["createdAt"] for post in feed if post["id"] == test_post.id
        )


def test_repost_of_repost_resolves_to_root(client, test_post, auth_token, other_auth_token) -> None:
    repost_id = client.post(f"/api/posts/{test_post.id}/repost", headers=other_auth_token).json()["id"]
    response = client.post(f"/api/posts/{repost_id}/repost", headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["originalPost"]["id"] == test_post.id
    assert response.json()["originalPost"]["content"] == test_post.content


def test_like_post_counts_every_call(client, test_post) -> None:
    for expected in range(1, 4):
        response = client.post(f"/api/posts/{test_post.id}/like")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"likes": expected}

    feed = client.get("/api/posts").json()
    assert feed[0]["likes"] == 3


def test_like_missing_post(client, test_post) -> None:
    for _ in range(2):
        response = client.post("/api/posts/9999/like")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Post not found"}

    assert client.get("/api/posts").json()[0]["likes"] == 0


def test_like_non_numeric_id(client) -> None:
    response = client.post("/api/posts/not-a-number/like")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_like_repost_id_is_not_redirected(client, test_post, other_auth_token) -> None:
    repost_id = client.post(f"/api/posts/{test_post.id}/repost", headers=other_auth_token).json()["id"]

    assert client.post(f"/api/posts/{repost_id}/like").json() == {"likes": 1}

    feed = {post["id"]: post for post in client.get("/api/posts").json()}
    assert feed[repost_id]["likes"] == 1
    assert feed[test_post.id]["likes"] == 0
