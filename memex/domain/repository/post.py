"""Post repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from memex.domain.model.post import Post
from memex.domain.value import CommunityId, PostId, UserId


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    HOT = "hot"  # hot_score DESC
    NEW = "new"  # created_at DESC
    TOP = "top"  # score DESC


class PostRepository(ABC):
    """Read side of the Post aggregate.

    Writes go through `BatchedMutation`.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community_id: Optional[CommunityId] = None,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination.

        Args:
            sort: Sort order (hot, new or top)
            community_id: Filter by community (None for all communities)
            include_deleted: Whether to include soft-deleted posts
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts by a specific author, newest first.

        Args:
            author_id: The author's user ID
            include_deleted: Whether to include soft-deleted posts
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts by the author
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: list[PostId]) -> dict[PostId, Post]:
        """Load several posts at once.

        Args:
            post_ids: Post IDs to load

        Returns:
            Mapping of ID to post for the posts that exist
        """
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Number of posts that are not deleted."""
        pass
