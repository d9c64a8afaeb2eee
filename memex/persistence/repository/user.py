"""PostgreSQL implementation of User repository."""

from typing import List, Optional

from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from memex.domain.model import User
from memex.domain.repository import UserRepository
from memex.domain.value import UserId
from memex.persistence.mappers import row_to_user
from memex.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: List[UserId]) -> dict[UserId, User]:
        """Load several users at once."""
        if not user_ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        users = [row_to_user(dict(row)) for row in result.mappings().all()]
        return {user.id: user for user in users}

    async def search_by_display_name(
        self, prefix: str, limit: int = 10, offset: int = 0
    ) -> List[User]:
        """Find unbanned users by display name prefix, ignoring case."""
        display_name = func.lower(users_table.c.display_name)
        stmt = (
            select(users_table)
            .where(
                users_table.c.is_banned.is_(False),
                display_name.startswith(prefix.lower(), autoescape=True),
            )
            .order_by(display_name, users_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_page(
        self,
        search: Optional[str] = None,
        banned: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[User]:
        """List users for moderation, newest first."""
        stmt = select(users_table)
        if banned is not None:
            stmt = stmt.where(users_table.c.is_banned.is_(banned))
        if search:
            needle = search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(users_table.c.display_name).contains(needle, autoescape=True),
                    func.lower(users_table.c.email).contains(needle, autoescape=True),
                )
            )
        stmt = (
            stmt.order_by(desc(users_table.c.created_at), users_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(self) -> int:
        """Number of registered users."""
        return await self.session.scalar(select(func.count()).select_from(users_table)) or 0
