"""Community and membership repository interfaces."""

from abc import ABC, abstractmethod
from typing import List, Optional

from memex.domain.model.community import Community, Membership
from memex.domain.value import CommunityId, CommunityName, UserId


class CommunityRepository(ABC):
    """Read side of the Community aggregate."""

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        pass

    @abstractmethod
    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by its unique name."""
        pass

    @abstractmethod
    async def find_active(
        self,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Community]:
        """Find active communities, largest first.

        Args:
            search: Optional name prefix
            limit: Maximum number of communities to return
            offset: Number of communities to skip

        Returns:
            Communities ordered by member count, descending
        """
        pass

    @abstractmethod
    async def find_by_ids(
        self, community_ids: List[CommunityId]
    ) -> dict[CommunityId, Community]:
        """Load several communities at once."""
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Number of active communities."""
        pass


class MembershipRepository(ABC):
    """Read side of community memberships."""

    @abstractmethod
    async def find(
        self, community_id: CommunityId, user_id: UserId
    ) -> Optional[Membership]:
        """Find a user's membership in a community.

        Args:
            community_id: The community's ID
            user_id: The user's ID

        Returns:
            The membership if the user is a member, None otherwise
        """
        pass
