"""In-memory user repository for testing."""

from typing import List, Optional

from memex.domain.model import User
from memex.domain.repository import UserRepository
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import UserId
from memex.persistence.mappers import row_to_user

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        row = self.database.get(DocumentRef(collection=Collection.USERS, id=user_id))
        return row_to_user(row) if row else None

    async def find_by_ids(self, user_ids: List[UserId]) -> dict[UserId, User]:
        """Load several users at once."""
        users = {}
        for user_id in user_ids:
            user = await self.find_by_id(user_id)
            if user:
                users[user_id] = user
        return users

    def _users(self) -> list[User]:
        return [row_to_user(row) for row in self.database.all(Collection.USERS)]

    async def search_by_display_name(
        self, prefix: str, limit: int = 10, offset: int = 0
    ) -> List[User]:
        """Find unbanned users by display name prefix, ignoring case."""
        prefix = prefix.lower()
        users = [
            u
            for u in self._users()
            if not u.is_banned and u.display_name.lower().startswith(prefix)
        ]
        users.sort(key=lambda u: (u.display_name.lower(), u.id))
        return users[offset : offset + limit]

    async def find_page(
        self,
        search: Optional[str] = None,
        banned: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[User]:
        """List users for moderation, newest first."""
        users = self._users()
        if banned is not None:
            users = [u for u in users if u.is_banned == banned]
        if search:
            needle = search.lower()
            users = [
                u
                for u in users
                if needle in u.display_name.lower() or needle in (u.email or "").lower()
            ]
        users.sort(key=lambda u: (-u.created_at.timestamp(), u.id))
        return users[offset : offset + limit]

    async def count(self) -> int:
        """Number of registered users."""
        return len(self.database.all(Collection.USERS))
