"""Moderation domain service.

Admins ban and unban users, feature posts, grant or revoke admin rights
and read site-wide counts. Every change is one document update written
through a BatchedMutation.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

import logfire

from memex.domain.batch import BatchedMutation
from memex.domain.error import (
    AdminRequired,
    ContentDeletedException,
    NotFoundError,
    ValidationError,
)
from memex.domain.model import Post, User
from memex.domain.model.common import utc_now
from memex.domain.repository import (
    CommentRepository,
    CommunityRepository,
    DocumentStore,
    PostRepository,
    UserRepository,
)
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import PostId, UserId, VerifiedIdentity

from .base import Service

DEFAULT_BAN_REASON = "Violation of community guidelines"


@dataclass(frozen=True)
class SiteStats:
    """Site-wide counts for the admin dashboard."""

    total_users: int
    total_posts: int
    total_comments: int
    total_communities: int
    generated_at: datetime


class ModerationService(Service):
    """Domain service for admin moderation."""

    def __init__(
        self,
        user_repository: UserRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        community_repository: CommunityRepository,
        document_store: DocumentStore,
    ) -> None:
        """Initialize moderation service.

        Args:
            user_repository: User repository
            post_repository: Post repository
            comment_repository: Comment repository, for stats
            community_repository: Community repository, for stats
            document_store: Store that commits moderation writes
        """
        self.user_repository = user_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.community_repository = community_repository
        self.document_store = document_store

    async def ensure_admin(self, identity: VerifiedIdentity) -> UserId:
        """Check that the caller may moderate.

        The token's admin claim is enough. Without it, the caller's profile
        must carry the admin flag and the caller must not be banned.

        Returns:
            The admin's user ID

        Raises:
            AdminRequired: If the caller is not an admin
        """
        admin_id = UserId(identity.uid)
        if identity.is_admin:
            return admin_id

        profile = await self.user_repository.find_by_id(admin_id)
        if profile and profile.is_admin and not profile.is_banned_at(utc_now()):
            return admin_id

        logfire.warn("Admin access denied", user_id=identity.uid)
        raise AdminRequired(identity.uid)

    async def ban_user(
        self,
        admin_id: UserId,
        user_id: UserId,
        reason: str | None = None,
        duration_days: int | None = None,
    ) -> User:
        """Ban a user, permanently or for a number of days.

        Banning an already banned user replaces the earlier ban.

        Raises:
            ValidationError: If an admin bans themselves or the duration isn't positive
            NotFoundError: If the user doesn't exist
            BatchCommitFailed: If the store rejected the write
        """
        if user_id == admin_id:
            raise ValidationError("You cannot ban yourself")
        if duration_days is not None and duration_days <= 0:
            raise ValidationError("Ban duration must be a positive number of days")

        with logfire.span(
            "moderation_service.ban_user",
            admin_id=str(admin_id),
            user_id=str(user_id),
            duration_days=duration_days,
        ):
            user = await self._get_user(user_id)
            now = utc_now()
            banned_until = now + timedelta(days=duration_days) if duration_days else None
            changes = {
                "is_banned": True,
                "ban_reason": (reason or "").strip() or DEFAULT_BAN_REASON,
                "banned_until": banned_until,
                "banned_by": admin_id,
                "updated_at": now,
            }
            await self._update_user(user_id, changes, "ban_user")

            logfire.info("User banned", user_id=str(user_id), admin_id=str(admin_id))
            return User.model_validate({**user.model_dump(), **changes})

    async def unban_user(self, admin_id: UserId, user_id: UserId) -> User:
        """Lift a user's ban.

        Raises:
            NotFoundError: If the user doesn't exist
            BatchCommitFailed: If the store rejected the write
        """
        with logfire.span(
            "moderation_service.unban_user", admin_id=str(admin_id), user_id=str(user_id)
        ):
            user = await self._get_user(user_id)
            if not user.is_banned:
                return user

            changes = {
                "is_banned": False,
                "ban_reason": None,
                "banned_until": None,
                "banned_by": None,
                "updated_at": utc_now(),
            }
            await self._update_user(user_id, changes, "unban_user")

            logfire.info("User unbanned", user_id=str(user_id), admin_id=str(admin_id))
            return User.model_validate({**user.model_dump(), **changes})

    async def set_admin(self, admin_id: UserId, user_id: UserId, is_admin: bool) -> User:
        """Grant or revoke admin rights.

        Raises:
            ValidationError: If an admin revokes their own rights
            NotFoundError: If the user doesn't exist
            BatchCommitFailed: If the store rejected the write
        """
        if user_id == admin_id and not is_admin:
            raise ValidationError("You cannot remove your own admin privileges")

        with logfire.span(
            "moderation_service.set_admin",
            admin_id=str(admin_id),
            user_id=str(user_id),
            is_admin=is_admin,
        ):
            user = await self._get_user(user_id)
            if user.is_admin == is_admin:
                return user

            changes = {"is_admin": is_admin, "updated_at": utc_now()}
            await self._update_user(user_id, changes, "set_admin")

            logfire.info(
                "Admin rights changed",
                user_id=str(user_id),
                admin_id=str(admin_id),
                is_admin=is_admin,
            )
            return User.model_validate({**user.model_dump(), **changes})

    async def set_featured(self, post_id: PostId, featured: bool) -> Post:
        """Feature or unfeature a post.

        Raises:
            NotFoundError: If the post doesn't exist
            ContentDeletedException: If the post was deleted
            BatchCommitFailed: If the store rejected the write
        """
        with logfire.span(
            "moderation_service.set_featured", post_id=str(post_id), featured=featured
        ):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                raise NotFoundError("Post", post_id)
            if post.is_deleted:
                raise ContentDeletedException("post", post_id)
            if post.is_featured == featured:
                return post

            changes = {"is_featured": featured, "updated_at": utc_now()}
            batch = BatchedMutation(self.document_store, "set_featured")
            batch.update(DocumentRef(collection=Collection.POSTS, id=post_id), changes)
            await batch.commit()

            logfire.info("Post featured flag changed", post_id=str(post_id), featured=featured)
            return post.model_copy(update=changes)

    async def stats(self) -> SiteStats:
        """Count users, live posts and comments, and active communities."""
        with logfire.span("moderation_service.stats"):
            return SiteStats(
                total_users=await self.user_repository.count(),
                total_posts=await self.post_repository.count_active(),
                total_comments=await self.comment_repository.count_active(),
                total_communities=await self.community_repository.count_active(),
                generated_at=utc_now(),
            )

    async def list_users(
        self,
        search: str | None = None,
        banned: bool | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[User]:
        """Users for the admin listing, newest first."""
        return await self.user_repository.find_page(
            search=(search or "").strip() or None,
            banned=banned,
            limit=limit,
            offset=offset,
        )

    async def _get_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            logfire.warn("Moderation target not found", user_id=str(user_id))
            raise NotFoundError("User", user_id)
        return user

    async def _update_user(self, user_id: UserId, changes: dict, label: str) -> None:
        batch = BatchedMutation(self.document_store, label)
        batch.update(DocumentRef(collection=Collection.USERS, id=user_id), changes)
        await batch.commit()
