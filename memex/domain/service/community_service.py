"""Community domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from memex.domain.batch import BatchedMutation
from memex.domain.error import (
    BatchConflict,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from memex.domain.model.common import utc_now
from memex.domain.model.community import Community, Membership
from memex.domain.repository import (
    CommunityRepository,
    DocumentStore,
    MembershipRepository,
    UserRepository,
)
from memex.domain.repository.document_store import (
    ArrayRemove,
    ArrayUnion,
    Collection,
    DocumentRef,
)
from memex.domain.value import (
    CommunityId,
    CommunityName,
    MembershipRole,
    UserId,
    new_id,
)

from .base import Service
from .counter_effects import CounterTarget, MutationKind, apply_counter_effects


def parse_community_name(raw: str) -> CommunityName:
    """Normalize and validate a community name.

    Raises:
        ValidationError: If the name is not 3-21 letters, digits or underscores
    """
    try:
        return CommunityName(raw)
    except PydanticValidationError as e:
        raise ValidationError(
            "Community name must be 3-21 characters and contain only "
            "letters, numbers, and underscores"
        ) from e


class CommunityService(Service):
    """Domain service for communities and memberships.

    Creating, joining and leaving each commit one batch touching the
    membership, the community's counters and the user's joined list.
    """

    def __init__(
        self,
        community_repository: CommunityRepository,
        membership_repository: MembershipRepository,
        user_repository: UserRepository,
        document_store: DocumentStore,
    ) -> None:
        """Initialize community service.

        Args:
            community_repository: Community repository
            membership_repository: Membership repository
            user_repository: User repository
            document_store: Store that commits community batches
        """
        self.community_repository = community_repository
        self.membership_repository = membership_repository
        self.user_repository = user_repository
        self.document_store = document_store

    async def create_community(
        self,
        creator_id: UserId,
        name: str,
        description: str,
        display_name: str | None = None,
        rules: list[str] | None = None,
        is_nsfw: bool = False,
    ) -> Community:
        """Create a community with its creator as first moderator.

        Args:
            creator_id: Creating user
            name: Unique name (lower-cased before validation)
            description: Community description
            display_name: Display name (defaults to the name)
            rules: Community rules
            is_nsfw: Whether the community is marked NSFW

        Returns:
            Created community

        Raises:
            ValidationError: If name or description is missing or the name is malformed
            ConflictError: If the name is taken
            NotFoundError: If the creator has no profile
            BatchCommitFailed: If the store rejected the write
        """
        if not name or not description or not description.strip():
            raise ValidationError("Name and description are required")
        community_name = parse_community_name(name)

        with logfire.span(
            "community_service.create_community",
            name=str(community_name),
            creator_id=str(creator_id),
        ):
            if await self.community_repository.find_by_name(community_name):
                logfire.warn("Community name taken", name=str(community_name))
                raise ConflictError("Community name already taken")

            if not await self.user_repository.find_by_id(creator_id):
                raise NotFoundError("User", creator_id)

            now = utc_now()
            try:
                community = Community(
                    id=CommunityId(new_id()),
                    name=community_name,
                    display_name=(display_name or "").strip() or str(community_name),
                    description=description.strip(),
                    rules=rules or [],
                    creator_id=creator_id,
                    moderators=[creator_id],
                    member_count=1,
                    post_count=0,
                    is_nsfw=is_nsfw,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            membership = Membership.join(
                community.id, creator_id, MembershipRole.MODERATOR, now
            )

            batch = BatchedMutation(self.document_store, "create_community")
            batch.set(
                DocumentRef(collection=Collection.COMMUNITIES, id=community.id),
                community.to_document(),
            )
            batch.set(
                DocumentRef(collection=Collection.MEMBERSHIPS, id=membership.id),
                membership.to_document(),
            )
            batch.update(
                DocumentRef(collection=Collection.USERS, id=creator_id),
                {"joined_communities": ArrayUnion(values=(community.id,))},
            )
            try:
                await batch.commit()
            except BatchConflict as e:
                # Lost a race with another create of the same name
                logfire.warn("Community name taken at commit", name=str(community_name))
                raise ConflictError("Community name already taken") from e

            logfire.info(
                "Community created", community_id=community.id, name=str(community_name)
            )
            return community

    async def get_community(self, community_id: CommunityId) -> Community:
        """Get an active community by ID.

        Raises:
            NotFoundError: If missing or inactive
        """
        community = await self.community_repository.find_by_id(community_id)
        if not community or not community.is_active:
            raise NotFoundError("Community", community_id)
        return community

    async def get_community_by_name(self, name: str) -> Community:
        """Get a community by name (case-insensitive).

        Raises:
            NotFoundError: If no community has that name
        """
        with logfire.span("community_service.get_community_by_name", name=name):
            try:
                community_name = CommunityName(name)
            except PydanticValidationError:
                raise NotFoundError("Community", name)

            community = await self.community_repository.find_by_name(community_name)
            if not community:
                raise NotFoundError("Community", name)
            return community

    async def list_communities(
        self, search: str | None = None, limit: int = 20, offset: int = 0
    ) -> list[Community]:
        """List active communities by member count, optionally by name prefix."""
        with logfire.span(
            "community_service.list_communities", search=search, limit=limit
        ):
            prefix = search.strip().lower() if search else None
            return await self.community_repository.find_active(
                search=prefix or None, limit=limit, offset=offset
            )

    async def join_community(
        self, community_id: CommunityId, user_id: UserId
    ) -> Membership:
        """Join a community as a member.

        Raises:
            NotFoundError: If the community or the user's profile doesn't exist
            ConflictError: If the user is already a member
            BatchCommitFailed: If the store rejected the write
        """
        with logfire.span(
            "community_service.join_community",
            community_id=str(community_id),
            user_id=str(user_id),
        ):
            await self.get_community(community_id)

            if await self.membership_repository.find(community_id, user_id):
                raise ConflictError("Already a member of this community")

            if not await self.user_repository.find_by_id(user_id):
                raise NotFoundError("User", user_id)

            now = utc_now()
            membership = Membership.join(
                community_id, user_id, MembershipRole.MEMBER, now
            )

            batch = BatchedMutation(self.document_store, "join_community")
            batch.set(
                DocumentRef(collection=Collection.MEMBERSHIPS, id=membership.id),
                membership.to_document(),
            )
            apply_counter_effects(
                batch,
                MutationKind.COMMUNITY_JOINED,
                {CounterTarget.COMMUNITY: community_id},
                now,
            )
            batch.update(
                DocumentRef(collection=Collection.USERS, id=user_id),
                {"joined_communities": ArrayUnion(values=(community_id,))},
            )
            await batch.commit()

            logfire.info(
                "Community joined", community_id=str(community_id), user_id=str(user_id)
            )
            return membership

    async def leave_community(self, community_id: CommunityId, user_id: UserId) -> None:
        """Leave a community.

        A leaving moderator is also dropped from the moderator list.

        Raises:
            NotFoundError: If the user is not a member
            BatchCommitFailed: If the store rejected the write
        """
        with logfire.span(
            "community_service.leave_community",
            community_id=str(community_id),
            user_id=str(user_id),
        ):
            membership = await self.membership_repository.find(community_id, user_id)
            if not membership:
                raise NotFoundError("Membership", f"{user_id} in {community_id}")

            now = utc_now()
            batch = BatchedMutation(self.document_store, "leave_community")
            batch.delete(DocumentRef(collection=Collection.MEMBERSHIPS, id=membership.id))
            apply_counter_effects(
                batch,
                MutationKind.COMMUNITY_LEFT,
                {CounterTarget.COMMUNITY: community_id},
                now,
            )
            if membership.role is MembershipRole.MODERATOR:
                batch.update(
                    DocumentRef(collection=Collection.COMMUNITIES, id=community_id),
                    {"moderators": ArrayRemove(values=(user_id,))},
                )
            batch.update(
                DocumentRef(collection=Collection.USERS, id=user_id),
                {"joined_communities": ArrayRemove(values=(community_id,))},
            )
            await batch.commit()

            logfire.info(
                "Community left", community_id=str(community_id), user_id=str(user_id)
            )

    async def get_joined_communities(self, user_id: UserId) -> list[Community]:
        """Active communities the user belongs to, in join order.

        Raises:
            NotFoundError: If the user has no profile
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        found = await self.community_repository.find_by_ids(user.joined_communities)
        return [
            found[cid]
            for cid in user.joined_communities
            if cid in found and found[cid].is_active
        ]
