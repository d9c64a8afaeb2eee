"""User domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from memex.domain.batch import BatchedMutation
from memex.domain.error import ConflictError, NotFoundError, ValidationError
from memex.domain.model import User
from memex.domain.model.common import utc_now
from memex.domain.repository import DocumentStore, UserRepository
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import UserId, VerifiedIdentity

from .base import Service

MIN_SEARCH_LENGTH = 2


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        document_store: DocumentStore,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            document_store: Store that commits profile writes
        """
        self.user_repository = user_repository
        self.document_store = document_store

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Load several users, skipping unknown ids."""
        unique = list(dict.fromkeys(user_ids))
        if not unique:
            return {}
        return await self.user_repository.find_by_ids(unique)

    async def search_users(
        self, query: str, limit: int = 10, offset: int = 0
    ) -> list[User]:
        """Find users whose display name starts with `query`, ignoring case.

        Banned users never show up in search.

        Raises:
            ValidationError: If the query is shorter than two characters
        """
        query = query.strip()
        if len(query) < MIN_SEARCH_LENGTH:
            raise ValidationError("Search query must be at least 2 characters")

        with logfire.span("user_service.search_users", query=query):
            return await self.user_repository.search_by_display_name(
                query, limit=limit, offset=offset
            )

    async def register_user(
        self,
        identity: VerifiedIdentity,
        display_name: str | None = None,
        bio: str | None = None,
    ) -> User:
        """Create the profile for a verified identity.

        Args:
            identity: Verified token claims
            display_name: Chosen name (defaults to the token's name)
            bio: Optional bio

        Returns:
            Created user with zero karma

        Raises:
            ConflictError: If the profile already exists
            ValidationError: If name or bio are too long
        """
        user_id = UserId(identity.uid)
        with logfire.span("user_service.register_user", user_id=str(user_id)):
            if await self.user_repository.find_by_id(user_id):
                logfire.warn("User already registered", user_id=str(user_id))
                raise ConflictError("User already registered")

            now = utc_now()
            try:
                user = User(
                    id=user_id,
                    email=identity.email,
                    display_name=(display_name or "").strip()
                    or identity.name
                    or "Anonymous",
                    bio=(bio or "").strip(),
                    photo_url=identity.picture or "",
                    karma=0,
                    joined_communities=[],
                    is_admin=identity.is_admin,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            batch = BatchedMutation(self.document_store, "register_user")
            batch.set(DocumentRef(collection=Collection.USERS, id=user.id), user.to_document())
            await batch.commit()

            logfire.info("User registered", user_id=str(user_id))
            return user

    async def update_profile(
        self,
        user_id: UserId,
        display_name: str | None = None,
        bio: str | None = None,
    ) -> User:
        """Update a user's display name and/or bio.

        Only the fields given are changed.

        Raises:
            NotFoundError: If user not found
            ValidationError: If a value is blank or too long
        """
        with logfire.span(
            "user_service.update_profile",
            user_id=str(user_id),
            display_name=display_name,
        ):
            user = await self.get_by_id(user_id)

            changes: dict[str, object] = {}
            if display_name is not None:
                changes["display_name"] = display_name.strip()
            if bio is not None:
                changes["bio"] = bio.strip()
            if not changes:
                return user

            changes["updated_at"] = utc_now()
            try:
                updated = User.model_validate({**user.model_dump(), **changes})
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            batch = BatchedMutation(self.document_store, "update_profile")
            batch.update(DocumentRef(collection=Collection.USERS, id=user_id), changes)
            await batch.commit()

            logfire.info("User profile updated", user_id=str(user_id))
            return updated
