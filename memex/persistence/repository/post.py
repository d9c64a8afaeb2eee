"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from memex.domain.model import Post
from memex.domain.repository.post import PostRepository, PostSortOrder
from memex.domain.value import CommunityId, PostId, UserId
from memex.persistence.mappers import row_to_post
from memex.persistence.tables import posts_table

SORT_COLUMNS = {
    PostSortOrder.HOT: posts_table.c.hot_score,
    PostSortOrder.NEW: posts_table.c.created_at,
    PostSortOrder.TOP: posts_table.c.score,
}


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_post(dict(row)) if row else None

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community_id: Optional[CommunityId] = None,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination.

        Hot ordering uses the stored `hot_score`, refreshed on every vote.
        """
        with logfire.span(
            "post_repository.find_all",
            sort=sort.value,
            community_id=community_id,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        ):
            stmt = select(posts_table)

            if community_id:
                stmt = stmt.where(posts_table.c.community_id == community_id)

            if not include_deleted:
                stmt = stmt.where(posts_table.c.is_deleted.is_(False))

            # Ties fall back to newest first, then id for a stable page order
            stmt = stmt.order_by(
                desc(SORT_COLUMNS[sort]),
                desc(posts_table.c.created_at),
                posts_table.c.id,
            )
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = [row_to_post(dict(row)) for row in result.mappings().all()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def find_by_author(
        self,
        author_id: UserId,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts by a specific author, newest first."""
        stmt = select(posts_table).where(posts_table.c.author_id == author_id)
        if not include_deleted:
            stmt = stmt.where(posts_table.c.is_deleted.is_(False))
        stmt = (
            stmt.order_by(desc(posts_table.c.created_at)).limit(limit).offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(dict(row)) for row in result.mappings().all()]

    async def find_by_ids(self, post_ids: list[PostId]) -> dict[PostId, Post]:
        """Load several posts at once."""
        if not post_ids:
            return {}

        stmt = select(posts_table).where(posts_table.c.id.in_(post_ids))
        result = await self.session.execute(stmt)
        posts = [row_to_post(dict(row)) for row in result.mappings().all()]
        return {post.id: post for post in posts}

    async def count_active(self) -> int:
        """Number of posts that are not deleted."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.is_deleted.is_(False))
        )
        return await self.session.scalar(stmt) or 0
