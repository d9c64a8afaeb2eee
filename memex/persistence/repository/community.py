"""PostgreSQL implementation of Community and Membership repositories."""

from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from memex.domain.model import Community, Membership
from memex.domain.repository import CommunityRepository, MembershipRepository
from memex.domain.value import CommunityId, CommunityName, UserId, membership_key
from memex.persistence.mappers import row_to_community, row_to_membership
from memex.persistence.tables import communities_table, memberships_table


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        stmt = select(communities_table).where(communities_table.c.id == community_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by its unique name."""
        stmt = select(communities_table).where(communities_table.c.name == name.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    async def find_active(
        self,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Community]:
        """Find active communities, largest first."""
        stmt = select(communities_table).where(communities_table.c.is_active.is_(True))
        if search:
            stmt = stmt.where(communities_table.c.name.startswith(search, autoescape=True))
        stmt = (
            stmt.order_by(desc(communities_table.c.member_count), communities_table.c.name)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_community(dict(row)) for row in result.mappings().all()]

    async def find_by_ids(
        self, community_ids: List[CommunityId]
    ) -> dict[CommunityId, Community]:
        """Load several communities at once."""
        if not community_ids:
            return {}

        stmt = select(communities_table).where(communities_table.c.id.in_(community_ids))
        result = await self.session.execute(stmt)
        communities = [row_to_community(dict(row)) for row in result.mappings().all()]
        return {community.id: community for community in communities}

    async def count_active(self) -> int:
        """Number of active communities."""
        stmt = (
            select(func.count())
            .select_from(communities_table)
            .where(communities_table.c.is_active.is_(True))
        )
        return await self.session.scalar(stmt) or 0


class PostgresMembershipRepository(MembershipRepository):
    """PostgreSQL implementation of MembershipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, community_id: CommunityId, user_id: UserId
    ) -> Optional[Membership]:
        """Find a user's membership by its composite key."""
        stmt = select(memberships_table).where(
            memberships_table.c.id == membership_key(community_id, user_id)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_membership(dict(row)) if row else None
