"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from memex.domain.model import Comment
from memex.domain.repository import CommentRepository
from memex.domain.value import CommentId, PostId, UserId
from memex.persistence.mappers import row_to_comment
from memex.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a post, newest first."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)
        if not include_deleted:
            stmt = stmt.where(comments_table.c.is_deleted.is_(False))
        stmt = (
            stmt.order_by(desc(comments_table.c.created_at), comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find non-deleted comments by an author, newest first."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.author_id == author_id,
                comments_table.c.is_deleted.is_(False),
            )
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def count_active(self) -> int:
        """Number of comments that are not deleted."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.is_deleted.is_(False))
        )
        return await self.session.scalar(stmt) or 0
