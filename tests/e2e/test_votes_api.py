"""End-to-end tests for the vote endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from memex.interface.api.app import create_app
from memex.persistence.repository.inmemory import InMemoryDatabase, InMemoryVoteRepository
from memex.util.di.container import setup_di
from tests.conftest import auth_header
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    return TestClient(app_instance)


@pytest.fixture
def database(container) -> InMemoryDatabase:
    return asyncio.run(container.get(InMemoryDatabase))


@pytest.fixture
def post_id(client) -> str:
    """A post by alice that bob can vote on."""
    for uid in ("alice", "bob"):
        response = client.post("/auth/register", json={}, headers=auth_header(uid))
        assert response.status_code == 201
    community = client.post(
        "/communities",
        json={"name": "dankmemes", "description": "Dank"},
        headers=auth_header("alice"),
    ).json()
    post = client.post(
        "/posts",
        json={"title": "Top meme", "community_id": community["community_id"]},
        headers=auth_header("alice"),
    )
    assert post.status_code == 201
    return post.json()["post_id"]


def vote(client, path: str, vote_type: str, uid: str = "bob"):
    return client.post(path, json={"vote_type": vote_type}, headers=auth_header(uid))


class TestPostVotes:
    """Voting on posts over HTTP."""

    def test_upvote_then_remove(self, client, post_id):
        # Act
        up = vote(client, f"/posts/{post_id}/vote", "upvote")
        removed = vote(client, f"/posts/{post_id}/vote", "remove")

        # Assert
        assert up.status_code == 200
        assert up.json() == {
            "message": "Vote recorded successfully",
            "new_score": 2,
            "upvotes": 2,
            "downvotes": 0,
            "user_vote": "upvote",
        }
        assert removed.json()["new_score"] == 1
        assert removed.json()["user_vote"] is None

    def test_vote_shows_in_listing(self, client, post_id):
        vote(client, f"/posts/{post_id}/vote", "downvote")

        mine = client.get("/posts", headers=auth_header("bob")).json()
        anonymous = client.get("/posts").json()

        assert mine["posts"][0]["user_vote"] == "downvote"
        assert mine["posts"][0]["score"] == 0
        assert anonymous["posts"][0]["user_vote"] is None

    def test_invalid_vote_type(self, client, post_id):
        response = vote(client, f"/posts/{post_id}/vote", "sideways")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid vote type"}

    def test_missing_vote_type(self, client, post_id):
        response = client.post(
            f"/posts/{post_id}/vote", json={}, headers=auth_header("bob")
        )

        assert response.status_code == 400

    def test_unknown_post(self, client, post_id):
        response = vote(client, "/posts/ghost/vote", "upvote")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_requires_token(self, client, post_id):
        response = client.post(f"/posts/{post_id}/vote", json={"vote_type": "upvote"})

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_rejected_write_returns_500(self, client, database, post_id):
        database.reject_next_commit = "store unavailable"

        response = vote(client, f"/posts/{post_id}/vote", "upvote")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save changes"}
        after = client.get(f"/posts/{post_id}").json()["post"]
        assert (after["upvotes"], after["score"]) == (1, 1)

    def test_store_read_failure_returns_json_500(self, client, post_id, monkeypatch):
        async def unreachable(self, subject_kind, subject_id, user_id):
            raise ConnectionError("database unreachable")

        monkeypatch.setattr(InMemoryVoteRepository, "find", unreachable)
        failing_client = TestClient(client.app, raise_server_exceptions=False)

        response = vote(failing_client, f"/posts/{post_id}/vote", "upvote")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Internal server error"}


class TestCommentVotes:
    """Voting on comments over HTTP."""

    def test_downvote_comment(self, client, post_id):
        comment = client.post(
            "/comments",
            json={"post_id": post_id, "content": "First!"},
            headers=auth_header("alice"),
        ).json()

        response = vote(client, f"/comments/{comment['comment_id']}/vote", "downvote")

        assert response.status_code == 200
        assert (response.json()["upvotes"], response.json()["downvotes"]) == (1, 1)
        thread = client.get(f"/comments/post/{post_id}", headers=auth_header("bob"))
        assert thread.json()["comments"][0]["user_vote"] == "downvote"
