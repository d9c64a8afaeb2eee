"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from memex.domain.model import Vote
from memex.domain.repository import VoteRepository
from memex.domain.value import SubjectKind, UserId, vote_key
from memex.persistence.mappers import row_to_vote
from memex.persistence.tables import comment_votes_table, post_votes_table

VOTE_TABLES = {
    SubjectKind.POST: post_votes_table,
    SubjectKind.COMMENT: comment_votes_table,
}


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, subject_kind: SubjectKind, subject_id: str, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote by its composite key."""
        table = VOTE_TABLES[subject_kind]
        stmt = select(table).where(table.c.id == vote_key(subject_id, user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_user_and_subjects(
        self,
        subject_kind: SubjectKind,
        user_id: UserId,
        subject_ids: Sequence[str],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not subject_ids:
            return []

        table = VOTE_TABLES[subject_kind]
        stmt = select(table).where(
            and_(
                table.c.user_id == user_id,
                table.c.subject_id.in_(subject_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]
