"""In-memory community and membership repositories for testing."""

from typing import List, Optional

from memex.domain.model import Community, Membership
from memex.domain.repository import CommunityRepository, MembershipRepository
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import CommunityId, CommunityName, UserId, membership_key
from memex.persistence.mappers import row_to_community, row_to_membership

from .database import InMemoryDatabase


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _communities(self) -> list[Community]:
        return [
            row_to_community(row) for row in self.database.all(Collection.COMMUNITIES)
        ]

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        row = self.database.get(
            DocumentRef(collection=Collection.COMMUNITIES, id=community_id)
        )
        return row_to_community(row) if row else None

    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by its unique name."""
        for community in self._communities():
            if community.name == name:
                return community
        return None

    async def find_active(
        self,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Community]:
        """Find active communities, largest first."""
        communities = [c for c in self._communities() if c.is_active]
        if search:
            communities = [c for c in communities if c.name.root.startswith(search)]
        communities.sort(key=lambda c: (-c.member_count, c.name.root))
        return communities[offset : offset + limit]

    async def find_by_ids(
        self, community_ids: List[CommunityId]
    ) -> dict[CommunityId, Community]:
        """Load several communities at once."""
        wanted = set(community_ids)
        return {c.id: c for c in self._communities() if c.id in wanted}

    async def count_active(self) -> int:
        """Number of active communities."""
        return sum(1 for c in self._communities() if c.is_active)


class InMemoryMembershipRepository(MembershipRepository):
    """In-memory implementation of MembershipRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find(
        self, community_id: CommunityId, user_id: UserId
    ) -> Optional[Membership]:
        """Find a user's membership by its composite key."""
        row = self.database.get(
            DocumentRef(
                collection=Collection.MEMBERSHIPS,
                id=membership_key(community_id, user_id),
            )
        )
        return row_to_membership(row) if row else None
