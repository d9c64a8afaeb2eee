"""Mappers for converting database rows to domain models.

Rows carry the same field names as the domain models, so mapping is mostly
wrapping ids and enums back into their domain types.
"""

from typing import Any, Dict

from memex.domain.model import Comment, Community, Membership, Post, User, Vote
from memex.domain.value import (
    CommentId,
    CommunityId,
    CommunityName,
    MediaType,
    MembershipId,
    MembershipRole,
    PostId,
    SubjectKind,
    UserId,
    VoteId,
    VoteType,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        email=row.get("email"),
        display_name=row["display_name"],
        bio=row.get("bio") or "",
        photo_url=row.get("photo_url") or "",
        karma=row["karma"],
        joined_communities=[CommunityId(c) for c in row.get("joined_communities") or []],
        is_admin=row.get("is_admin", False),
        is_banned=row.get("is_banned", False),
        ban_reason=row.get("ban_reason"),
        banned_until=row.get("banned_until"),
        banned_by=UserId(row["banned_by"]) if row.get("banned_by") else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        content=row.get("content") or "",
        community_id=CommunityId(row["community_id"]),
        tags=list(row.get("tags") or []),
        author_id=UserId(row["author_id"]),
        media_url=row.get("media_url"),
        media_type=MediaType(row["media_type"]) if row.get("media_type") else None,
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        score=row["score"],
        hot_score=row["hot_score"],
        comment_count=row["comment_count"],
        is_featured=row.get("is_featured", False),
        is_deleted=row.get("is_deleted", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        content=row["content"],
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        score=row["score"],
        reply_count=row["reply_count"],
        is_deleted=row.get("is_deleted", False),
        is_edited=row.get("is_edited", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(row["id"]),
        subject_kind=SubjectKind(row["subject_kind"]),
        subject_id=row["subject_id"],
        user_id=UserId(row["user_id"]),
        type=VoteType(row["type"]),
        created_at=row["created_at"],
    )


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert database row to Community domain model."""
    return Community(
        id=CommunityId(row["id"]),
        name=CommunityName(row["name"]),
        display_name=row["display_name"],
        description=row.get("description") or "",
        rules=list(row.get("rules") or []),
        creator_id=UserId(row["creator_id"]),
        moderators=[UserId(m) for m in row.get("moderators") or []],
        member_count=row["member_count"],
        post_count=row["post_count"],
        is_active=row.get("is_active", True),
        is_nsfw=row.get("is_nsfw", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_membership(row: Dict[str, Any]) -> Membership:
    """Convert database row to Membership domain model."""
    return Membership(
        id=MembershipId(row["id"]),
        community_id=CommunityId(row["community_id"]),
        user_id=UserId(row["user_id"]),
        role=MembershipRole(row["role"]),
        joined_at=row["joined_at"],
    )
