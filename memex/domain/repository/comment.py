"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from memex.domain.model.comment import Comment
from memex.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Read side of the Comment entity.

    Writes go through `BatchedMutation`.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a post, newest first.

        Args:
            post_id: The post's ID
            include_deleted: Whether to include soft-deleted comments
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments on the post
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find non-deleted comments by an author, newest first."""
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Number of comments that are not deleted."""
        pass
