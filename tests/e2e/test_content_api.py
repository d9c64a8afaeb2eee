"""End-to-end tests for posts, comments, communities and media."""

import pytest
from fastapi.testclient import TestClient

from memex.interface.api.app import create_app
from memex.util.di.container import setup_di
from tests.conftest import auth_header
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, build_test_container())
    return TestClient(app_instance)


@pytest.fixture
def community_id(client) -> str:
    for uid in ("alice", "bob"):
        client.post("/auth/register", json={}, headers=auth_header(uid))
    response = client.post(
        "/communities",
        json={"name": "DankMemes", "description": "Dank", "rules": ["No reposts"]},
        headers=auth_header("alice"),
    )
    assert response.status_code == 201
    assert response.json()["name"] == "dankmemes"
    return response.json()["community_id"]


def create_post(client, community_id: str, uid: str = "alice", **fields) -> str:
    response = client.post(
        "/posts",
        json={"title": "A meme", "community_id": community_id, **fields},
        headers=auth_header(uid),
    )
    assert response.status_code == 201
    return response.json()["post_id"]


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestPosts:
    """Post endpoints."""

    def test_create_and_get(self, client, community_id):
        post_id = create_post(client, community_id, tags=["Cats"])

        response = client.get(f"/posts/{post_id}")

        post = response.json()["post"]
        assert post["title"] == "A meme"
        assert post["tags"] == ["cats"]
        assert post["author"]["display_name"] == "Alice"

    def test_get_missing(self, client):
        response = client.get("/posts/ghost")

        assert response.status_code == 404
        assert response.json() == {"error": "Post not found"}

    def test_list_filtered_by_community(self, client, community_id):
        create_post(client, community_id)
        other = client.post(
            "/communities",
            json={"name": "catmemes", "description": "Cats"},
            headers=auth_header("alice"),
        ).json()["community_id"]
        create_post(client, other)

        response = client.get("/posts", params={"community": other, "sort": "new"})

        assert [p["community_id"] for p in response.json()["posts"]] == [other]

    def test_bad_sort(self, client):
        response = client.get("/posts", params={"sort": "best"})

        assert response.status_code == 400
        assert "sort" in response.json()["error"]

    def test_page_size_capped(self, client):
        assert client.get("/posts", params={"limit": 51}).status_code == 400

    def test_invalid_token_on_public_read(self, client):
        response = client.get("/posts", headers={"Authorization": "Bearer forged"})

        assert response.status_code == 401

    def test_delete_by_author_only(self, client, community_id):
        post_id = create_post(client, community_id)

        forbidden = client.delete(f"/posts/{post_id}", headers=auth_header("bob"))
        deleted = client.delete(f"/posts/{post_id}", headers=auth_header("alice"))

        assert forbidden.status_code == 403
        assert deleted.status_code == 200
        assert client.get("/posts").json()["posts"] == []

    def test_admin_may_delete(self, client, community_id):
        post_id = create_post(client, community_id)

        response = client.delete(
            f"/posts/{post_id}", headers=auth_header("root", is_admin=True)
        )

        assert response.status_code == 200

    def test_create_requires_profile(self, client, community_id):
        response = client.post(
            "/posts",
            json={"title": "Hi", "community_id": community_id},
            headers=auth_header("stranger"),
        )

        assert response.status_code == 404


class TestComments:
    """Comment endpoints."""

    def test_threaded_comments(self, client, community_id):
        post_id = create_post(client, community_id)
        root = client.post(
            "/comments",
            json={"post_id": post_id, "content": "Root"},
            headers=auth_header("alice"),
        )
        assert root.status_code == 201
        reply = client.post(
            "/comments",
            json={
                "post_id": post_id,
                "content": "Reply",
                "parent_id": root.json()["comment_id"],
            },
            headers=auth_header("bob"),
        )
        assert reply.status_code == 201

        thread = client.get(f"/comments/post/{post_id}").json()["comments"]
        post = client.get(f"/posts/{post_id}").json()["post"]

        assert [c["content"] for c in thread] == ["Root"]
        assert [c["content"] for c in thread[0]["replies"]] == ["Reply"]
        assert post["comment_count"] == 2

    def test_blank_comment(self, client, community_id):
        post_id = create_post(client, community_id)

        response = client.post(
            "/comments",
            json={"post_id": post_id, "content": "  "},
            headers=auth_header("alice"),
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Post ID and content are required"}

    def test_edit_own_comment_only(self, client, community_id):
        post_id = create_post(client, community_id)
        comment_id = client.post(
            "/comments",
            json={"post_id": post_id, "content": "Root"},
            headers=auth_header("alice"),
        ).json()["comment_id"]

        forbidden = client.put(
            f"/comments/{comment_id}", json={"content": "x"}, headers=auth_header("bob")
        )
        edited = client.put(
            f"/comments/{comment_id}", json={"content": "Edited"}, headers=auth_header("alice")
        )

        assert forbidden.status_code == 403
        assert edited.status_code == 200

    def test_edit_deleted_comment(self, client, community_id):
        post_id = create_post(client, community_id)
        comment_id = client.post(
            "/comments",
            json={"post_id": post_id, "content": "Root"},
            headers=auth_header("alice"),
        ).json()["comment_id"]
        client.delete(f"/comments/{comment_id}", headers=auth_header("alice"))

        response = client.put(
            f"/comments/{comment_id}", json={"content": "Back"}, headers=auth_header("alice")
        )

        assert response.status_code == 400


class TestCommunities:
    """Community endpoints."""

    def test_join_leave_flow(self, client, community_id):
        joined = client.post(
            f"/communities/{community_id}/join", headers=auth_header("bob")
        )
        again = client.post(
            f"/communities/{community_id}/join", headers=auth_header("bob")
        )
        mine = client.get("/communities/user/joined", headers=auth_header("bob"))
        left = client.post(
            f"/communities/{community_id}/leave", headers=auth_header("bob")
        )
        left_again = client.post(
            f"/communities/{community_id}/leave", headers=auth_header("bob")
        )

        assert joined.json() == {"message": "Successfully joined community"}
        assert again.status_code == 409
        assert [c["id"] for c in mine.json()["communities"]] == [community_id]
        assert left.json() == {"message": "Successfully left community"}
        assert left_again.status_code == 404
        assert left_again.json() == {"error": "Not a member of this community"}

    def test_get_by_name(self, client, community_id):
        found = client.get("/communities/DANKMEMES")
        missing = client.get("/communities/nothing_here")

        assert found.json()["community"]["rules"] == ["No reposts"]
        assert missing.status_code == 404
        assert missing.json() == {"error": "Community not found"}

    def test_duplicate_name(self, client, community_id):
        response = client.post(
            "/communities",
            json={"name": "dankmemes", "description": "Again"},
            headers=auth_header("bob"),
        )

        assert response.status_code == 409

    def test_search(self, client, community_id):
        response = client.get("/communities", params={"search": "dank"})

        assert [c["name"] for c in response.json()["communities"]] == ["dankmemes"]


class TestMedia:
    """Media upload endpoint."""

    def test_upload_then_post(self, client, community_id):
        upload = client.post(
            "/media",
            content=b"GIF89a....",
            headers={**auth_header("alice"), "Content-Type": "image/gif"},
        )
        assert upload.status_code == 201
        media = upload.json()
        assert media["type"] == "image"

        post_id = create_post(
            client, community_id, media_url=media["url"], media_type=media["type"]
        )

        post = client.get(f"/posts/{post_id}").json()["post"]
        assert post["media_url"] == media["url"]

    def test_rejects_non_media(self, client):
        response = client.post(
            "/media",
            content=b"%PDF-1.7",
            headers={**auth_header("alice"), "Content-Type": "application/pdf"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Only image and video files are allowed"}

    def test_requires_token(self, client):
        response = client.post(
            "/media", content=b"GIF89a", headers={"Content-Type": "image/gif"}
        )

        assert response.status_code == 401

    def test_rejects_declared_length_over_limit(self, client):
        body = b"\0" * (10 * 1024 * 1024 + 1)

        response = client.post(
            "/media",
            content=body,
            headers={**auth_header("alice"), "Content-Type": "image/png"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File too large (max 10MB)"}

    def test_rejects_streamed_body_over_limit(self, client):
        chunk = b"\0" * (1024 * 1024)

        def chunks():
            for _ in range(11):
                yield chunk

        response = client.post(
            "/media",
            content=chunks(),
            headers={**auth_header("alice"), "Content-Type": "video/mp4"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File too large (max 10MB)"}
