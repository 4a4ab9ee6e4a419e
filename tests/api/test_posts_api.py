# tests/api/test_posts_api.py
"""Tests for post-related endpoints."""

from fastapi import status

from blog_stage.models import Post, PostStatus, UserStatus


def test_list_posts_is_public(client, make_post) -> None:
    make_post(title="first", tags=["a"])
    make_post(title="second", tags=["b"])

    response = client.get("/posts")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert [post["title"] for post in body["data"]] == ["second", "first"]
    assert body["pagination"] == {"total": 2, "page": 1, "limit": 10, "totalPages": 1}
    assert {"isFeatured", "authorId", "createdAt", "updatedAt"} <= body["data"][0].keys()


def test_list_posts_query_filters(client, make_post, other_user) -> None:
    make_post(title="python", tags=["python", "web"], is_featured=True)
    make_post(title="rust", tags=["rust"], author=other_user)
    make_post(title="draft", tags=["python"], status=PostStatus.DRAFT)

    response = client.get("/posts", params={"tags": "rust, web", "sortBy": "title", "sortOrder": "asc"})
    assert [post["title"] for post in response.json()["data"]] == ["python", "rust"]

    response = client.get("/posts", params={"isFeatured": "true"})
    assert [post["title"] for post in response.json()["data"]] == ["python"]

    response = client.get("/posts", params={"status": "DRAFT"})
    assert [post["title"] for post in response.json()["data"]] == ["draft"]

    response = client.get("/posts", params={"authorId": other_user.id})
    assert [post["title"] for post in response.json()["data"]] == ["rust"]


def test_list_posts_ignores_unknown_featured_flag(client, make_post) -> None:
    make_post(is_featured=True)
    make_post(is_featured=False)

    response = client.get("/posts", params={"isFeatured": "maybe"})

    assert response.json()["pagination"]["total"] == 2


def test_list_posts_bad_paging_falls_back(client, make_post) -> None:
    make_post()

    response = client.get("/posts", params={"page": "abc", "limit": "-5"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["pagination"] == {"total": 1, "page": 1, "limit": 10, "totalPages": 1}


def test_list_posts_huge_paging_is_capped(client, make_post) -> None:
    make_post()

    response = client.get("/posts", params={"page": "1e18", "limit": "1e19"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["data"] == []
    assert body["pagination"]["limit"] == 100
    assert body["pagination"]["total"] == 1


def test_list_posts_rejects_unknown_status(client) -> None:
    response = client.get("/posts", params={"status": "PENDING"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["success"] is False
    assert "PENDING" in body["message"]


def test_list_posts_rejects_unknown_sort_field(client) -> None:
    response = client.get("/posts", params={"sortBy": "passwordHash"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["success"] is False


def test_create_post_requires_auth(client) -> None:
    response = client.post("/posts", json={"title": "t", "content": "c", "tags": []})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"success": False, "message": "You are not authorized!"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_create_post_success(client, test_user, auth_token) -> None:
    response = client.post(
        "/posts",
        json={
            "title": "Hello",
            "content": "World",
            "tags": ["intro"],
            "thumbnail": "https://example.com/a.png",
            "isFeatured": True,
        },
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["authorId"] == test_user.id
    assert data["tags"] == ["intro"]
    assert data["status"] == "DRAFT"
    assert data["views"] == 0
    assert data["isFeatured"] is False


def test_create_post_validation_error(client, auth_token) -> None:
    response = client.post("/posts", json={"content": "no title", "tags": []}, headers=auth_token)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert any(error.startswith("title") for error in body["errors"])


def test_create_post_title_too_long(client, auth_token) -> None:
    response = client.post(
        "/posts",
        json={"title": "x" * 226, "content": "c", "tags": []},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_tag_too_long(client, auth_token) -> None:
    response = client.post(
        "/posts",
        json={"title": "t", "content": "c", "tags": ["x" * 101]},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert any(error.startswith("tags") for error in response.json()["errors"])

    response = client.post(
        "/posts",
        json={"title": "t", "content": "c", "tags": ["x" * 100]},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_update_post_tag_too_long(client, test_post, auth_token) -> None:
    response = client.patch(f"/posts/{test_post.id}", json={"tags": ["x" * 101]}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_invalid_token_is_unauthorized(client) -> None:
    response = client.get("/posts/my-posts", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["success"] is False


def test_blocked_user_is_forbidden(client, make_user, headers_for) -> None:
    blocked = make_user(status=UserStatus.BLOCKED)
    response = client.get("/posts/my-posts", headers=headers_for(blocked))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unverified_user_is_forbidden(client, make_user, headers_for) -> None:
    unverified = make_user(email_verified=False)
    response = client.get("/posts/my-posts", headers=headers_for(unverified))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_get_my_posts(client, make_post, make_comment, other_user, auth_token) -> None:
    mine = make_post(title="mine")
    make_post(title="theirs", author=other_user)
    make_comment(mine)

    response = client.get("/posts/my-posts", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [post["title"] for post in data] == ["mine"]
    assert data[0]["commentCount"] == 1


def test_stats_is_admin_only(client, auth_token, admin_auth_token, test_post) -> None:
    response = client.get("/posts/stats", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.get("/posts/stats", headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    stats = response.json()
    assert stats["totalPost"] == 1
    assert stats["publishedPosts"] == 1
    assert stats["totalUsers"] == 2
    assert stats["adminCount"] == 1


def test_get_post_by_id(client, test_post, make_comment) -> None:
    comment = make_comment(test_post)
    make_comment(test_post, parent=comment, content="reply")

    response = client.get(f"/posts/{test_post.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["views"] == 1
    assert data["comments"][0]["id"] == comment.id
    assert data["comments"][0]["replies"][0]["content"] == "reply"

    response = client.get(f"/posts/{test_post.id}")
    assert response.json()["views"] == 2


def test_get_post_not_found(client) -> None:
    response = client.get("/posts/missing")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"success": False, "message": "Post not found"}


def test_update_post_by_owner(client, test_post, auth_token) -> None:
    response = client.patch(
        f"/posts/{test_post.id}",
        json={"title": "Renamed", "status": "PUBLISHED"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["content"] == "First post body"
    assert data["tags"] == ["intro", "news"]


def test_update_post_rejects_null_title(client, test_post, auth_token) -> None:
    response = client.patch(f"/posts/{test_post.id}", json={"title": None}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_post_by_stranger(client, db_session, test_post, other_auth_token) -> None:
    response = client.patch(
        f"/posts/{test_post.id}",
        json={"title": "Hijacked"},
        headers=other_auth_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "You are not the owner/creator of the post!"
    db_session.expire_all()
    assert db_session.get(Post, test_post.id).title == "Hello world"


def test_admin_can_feature_post(client, test_post, admin_auth_token) -> None:
    response = client.patch(
        f"/posts/{test_post.id}",
        json={"isFeatured": True},
        headers=admin_auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["isFeatured"] is True


def test_delete_post(client, db_session, test_post, auth_token) -> None:
    response = client.delete(f"/posts/{test_post.id}", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "message": "Post deleted successfully"}
    assert db_session.get(Post, test_post.id) is None


def test_delete_post_by_stranger(client, test_post, other_auth_token) -> None:
    response = client.delete(f"/posts/{test_post.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_missing_post(client, auth_token) -> None:
    response = client.delete("/posts/missing", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
