"""In-memory post repository for testing."""

from typing import List, Optional

from memex.domain.model import Post
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.repository.post import PostRepository, PostSortOrder
from memex.domain.value import CommunityId, PostId, UserId
from memex.persistence.mappers import row_to_post

from .database import InMemoryDatabase


def _sort_key(sort: PostSortOrder):
    def key(post: Post):
        if sort is PostSortOrder.HOT:
            primary = post.hot_score
        elif sort is PostSortOrder.TOP:
            primary = float(post.score)
        else:
            primary = post.created_at.timestamp()
        return (-primary, -post.created_at.timestamp(), post.id)

    return key


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _posts(self) -> list[Post]:
        return [row_to_post(row) for row in self.database.all(Collection.POSTS)]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        row = self.database.get(DocumentRef(collection=Collection.POSTS, id=post_id))
        return row_to_post(row) if row else None

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community_id: Optional[CommunityId] = None,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        posts = self._posts()
        if community_id:
            posts = [p for p in posts if p.community_id == community_id]
        if not include_deleted:
            posts = [p for p in posts if not p.is_deleted]
        posts.sort(key=_sort_key(sort))
        return posts[offset : offset + limit]

    async def find_by_author(
        self,
        author_id: UserId,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts by a specific author, newest first."""
        posts = [p for p in self._posts() if p.author_id == author_id]
        if not include_deleted:
            posts = [p for p in posts if not p.is_deleted]
        posts.sort(key=_sort_key(PostSortOrder.NEW))
        return posts[offset : offset + limit]

    async def find_by_ids(self, post_ids: list[PostId]) -> dict[PostId, Post]:
        """Load several posts at once."""
        wanted = set(post_ids)
        return {p.id: p for p in self._posts() if p.id in wanted}

    async def count_active(self) -> int:
        """Number of posts that are not deleted."""
        return sum(1 for p in self._posts() if not p.is_deleted)
