"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from memex.domain.model.user import User
from memex.domain.value import UserId


class UserRepository(ABC):
    """Read side of the User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's uid

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: List[UserId]) -> dict[UserId, User]:
        """Load several users at once.

        Args:
            user_ids: User IDs to load

        Returns:
            Mapping of ID to user for the users that exist
        """
        pass

    @abstractmethod
    async def search_by_display_name(
        self, prefix: str, limit: int = 10, offset: int = 0
    ) -> List[User]:
        """Find users whose display name starts with `prefix`.

        Matching ignores case. Banned users are left out.

        Args:
            prefix: Display name prefix
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            Matching users ordered by display name
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        search: Optional[str] = None,
        banned: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[User]:
        """List users for moderation, newest first.

        Args:
            search: Case-insensitive substring of display name or email
            banned: Only banned (True) or only unbanned (False) users
            limit: Maximum number of users to return
            offset: Number of users to skip
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of registered users."""
        pass
