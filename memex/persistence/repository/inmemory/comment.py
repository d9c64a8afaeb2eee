"""In-memory comment repository for testing."""

from typing import List, Optional

from memex.domain.model import Comment
from memex.domain.repository import CommentRepository
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import CommentId, PostId, UserId
from memex.persistence.mappers import row_to_comment

from .database import InMemoryDatabase


def _newest_first(comment: Comment):
    return (-comment.created_at.timestamp(), comment.id)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _comments(self) -> list[Comment]:
        return [row_to_comment(row) for row in self.database.all(Collection.COMMENTS)]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        row = self.database.get(
            DocumentRef(collection=Collection.COMMENTS, id=comment_id)
        )
        return row_to_comment(row) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a post, newest first."""
        comments = [c for c in self._comments() if c.post_id == post_id]
        if not include_deleted:
            comments = [c for c in comments if not c.is_deleted]
        comments.sort(key=_newest_first)
        return comments[offset : offset + limit]

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find non-deleted comments by an author, newest first."""
        comments = [
            c
            for c in self._comments()
            if c.author_id == author_id and not c.is_deleted
        ]
        comments.sort(key=_newest_first)
        return comments[offset : offset + limit]

    async def count_active(self) -> int:
        """Number of comments that are not deleted."""
        return sum(1 for c in self._comments() if not c.is_deleted)
