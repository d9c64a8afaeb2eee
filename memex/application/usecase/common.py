"""Response views shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel, Field

from memex.domain.model import Comment, Community, Post, User
from memex.domain.value import MediaType, MembershipRole, VoteType

MAX_PAGE_SIZE = 50


def page_offset(page: int, limit: int) -> int:
    """Offset of a 1-based page."""
    return (page - 1) * limit


class PageRequest(BaseModel):
    """Page-based pagination input."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)


class Pagination(BaseModel):
    """Pagination info returned with a page.

    `has_more` is true when the page came back full.
    """

    page: int
    limit: int
    has_more: bool

    @classmethod
    def for_page(cls, page: int, limit: int, count: int) -> "Pagination":
        return cls(page=page, limit=limit, has_more=count == limit)


class AuthorSummary(BaseModel):
    """Public fields of a content author."""

    uid: str
    display_name: str
    photo_url: str

    @classmethod
    def from_user(cls, user: User | None) -> "AuthorSummary | None":
        if user is None:
            return None
        return cls(uid=user.id, display_name=user.display_name, photo_url=user.photo_url)


class PostView(BaseModel):
    """Post as returned by the API."""

    id: str
    title: str
    content: str
    community_id: str
    tags: list[str]
    author_id: str
    media_url: str | None
    media_type: MediaType | None
    upvotes: int
    downvotes: int
    score: int
    hot_score: float
    comment_count: int
    is_featured: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary | None = None
    user_vote: VoteType | None = None

    @classmethod
    def from_post(
        cls,
        post: Post,
        author: User | None = None,
        user_vote: VoteType | None = None,
    ) -> "PostView":
        return cls(
            **post.model_dump(),
            author=AuthorSummary.from_user(author),
            user_vote=user_vote,
        )


class CommentView(BaseModel):
    """Comment as returned by the API, with nested replies."""

    id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    upvotes: int
    downvotes: int
    score: int
    reply_count: int
    is_edited: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary | None = None
    user_vote: VoteType | None = None
    post_title: str | None = None
    replies: list["CommentView"] = Field(default_factory=list)

    @classmethod
    def from_comment(
        cls,
        comment: Comment,
        author: User | None = None,
        user_vote: VoteType | None = None,
    ) -> "CommentView":
        return cls(
            **comment.model_dump(),
            author=AuthorSummary.from_user(author),
            user_vote=user_vote,
        )


class CommunityView(BaseModel):
    """Community as returned by the API."""

    id: str
    name: str
    display_name: str
    description: str
    rules: list[str]
    creator_id: str
    moderators: list[str]
    member_count: int
    post_count: int
    is_nsfw: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_community(cls, community: Community) -> "CommunityView":
        return cls(**community.model_dump(exclude={"is_active"}))


class MembershipView(BaseModel):
    """A user's membership in a community."""

    community_id: str
    user_id: str
    role: MembershipRole
    joined_at: datetime


class PublicProfile(BaseModel):
    """Profile fields anyone may see."""

    uid: str
    display_name: str
    bio: str
    photo_url: str
    karma: int
    joined_communities: list[str]
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "PublicProfile":
        return cls(
            uid=user.id,
            display_name=user.display_name,
            bio=user.bio,
            photo_url=user.photo_url,
            karma=user.karma,
            joined_communities=list(user.joined_communities),
            created_at=user.created_at,
        )


class AccountProfile(PublicProfile):
    """Profile as seen by its owner."""

    email: str | None
    is_admin: bool
    is_banned: bool
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AccountProfile":
        return cls(
            **PublicProfile.from_user(user).model_dump(),
            email=user.email,
            is_admin=user.is_admin,
            is_banned=user.is_banned,
            updated_at=user.updated_at,
        )


class ModeratedUserView(AccountProfile):
    """Profile with ban details, as shown to admins."""

    ban_reason: str | None
    banned_until: datetime | None
    banned_by: str | None

    @classmethod
    def from_user(cls, user: User) -> "ModeratedUserView":
        return cls(
            **AccountProfile.from_user(user).model_dump(),
            ban_reason=user.ban_reason,
            banned_until=user.banned_until,
            banned_by=user.banned_by,
        )


class UserSearchResult(BaseModel):
    """A user as listed in search results."""

    uid: str
    display_name: str
    photo_url: str
    karma: int
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserSearchResult":
        return cls(
            uid=user.id,
            display_name=user.display_name,
            photo_url=user.photo_url,
            karma=user.karma,
            created_at=user.created_at,
        )
