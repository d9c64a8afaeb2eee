"""Test configuration and shared helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any

from dishka import AsyncContainer

from memex.domain.model import Comment, Community, Post, User
from memex.domain.model.common import DomainModel
from memex.domain.repository.document_store import Collection
from memex.domain.service import CommentService, CommunityService, PostService, UserService
from memex.domain.value import CommentId, CommunityId, PostId, UserId, VerifiedIdentity
from memex.persistence.repository.inmemory import InMemoryDatabase


def make_identity(uid: str, is_admin: bool = False) -> VerifiedIdentity:
    """Identity as the mock token verifier would return it."""
    return VerifiedIdentity(
        uid=uid,
        email=f"{uid}@example.com",
        name=uid.capitalize(),
        picture=None,
        is_admin=is_admin,
    )


def auth_header(uid: str, is_admin: bool = False) -> dict[str, str]:
    """Authorization header accepted by the mock token verifier."""
    prefix = "mock-admin-" if is_admin else "mock-"
    return {"Authorization": f"Bearer {prefix}{uid}"}


async def seed_user(env: AsyncContainer, uid: str = "alice") -> User:
    """Register a user through the user service."""
    user_service = await env.get(UserService)
    return await user_service.register_user(make_identity(uid))


async def seed_community(
    env: AsyncContainer, creator_id: str, name: str = "dankmemes"
) -> Community:
    """Create a community through the community service."""
    community_service = await env.get(CommunityService)
    return await community_service.create_community(
        creator_id=UserId(creator_id),
        name=name,
        description=f"All about {name}",
    )


async def seed_post(
    env: AsyncContainer,
    author_id: str,
    community_id: str,
    title: str = "When the build passes first try",
) -> Post:
    """Create a post through the post service."""
    post_service = await env.get(PostService)
    return await post_service.create_post(
        author_id=UserId(author_id),
        title=title,
        community_id=CommunityId(community_id),
    )


async def seed_comment(
    env: AsyncContainer,
    author_id: str,
    post_id: str,
    content: str = "First!",
    parent_id: str | None = None,
) -> Comment:
    """Create a comment through the comment service."""
    comment_service = await env.get(CommentService)
    return await comment_service.create_comment(
        post_id=PostId(post_id),
        author_id=UserId(author_id),
        content=content,
        parent_id=CommentId(parent_id) if parent_id else None,
    )


def put_document(
    database: InMemoryDatabase, collection: Collection, model: DomainModel
) -> None:
    """Store a model directly, bypassing services (for drifted fixtures)."""
    database.collections[collection][model.id] = model.to_document()


def document(
    database: InMemoryDatabase, collection: Collection, doc_id: str
) -> dict[str, Any] | None:
    """Raw stored document."""
    return database.collections[collection].get(doc_id)


def hours_ago(hours: float) -> datetime:
    """A timezone-aware timestamp in the past."""
    return datetime.now(timezone.utc) - timedelta(hours=hours)
