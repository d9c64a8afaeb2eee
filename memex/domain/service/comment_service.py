"""Comment domain service."""

from dataclasses import dataclass, field

import logfire

from memex.domain.batch import BatchedMutation
from memex.domain.error import (
    AccountBanned,
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from memex.domain.model.comment import Comment
from memex.domain.model.common import utc_now
from memex.domain.repository import (
    CommentRepository,
    DocumentStore,
    PostRepository,
    UserRepository,
)
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import CommentId, PostId, UserId, new_id

from .base import Service
from .counter_effects import CounterTarget, MutationKind, apply_counter_effects


@dataclass
class CommentThreadNode:
    """A comment with its direct replies."""

    comment: Comment
    replies: list["CommentThreadNode"] = field(default_factory=list)


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        document_store: DocumentStore,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            user_repository: User repository
            document_store: Store that commits comment batches
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.document_store = document_store

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        One batch writes the comment and moves three counters: the post's
        comment count, the parent's reply count (for replies) and the
        author's karma. Either all four effects land or none do.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If content is blank or the parent is on another post
            NotFoundError: If the post, parent comment or author profile is missing
            AccountBanned: If the author is banned
            BatchCommitFailed: If the store rejected the write
        """
        content = content.strip()
        if not post_id or not content:
            raise ValidationError("Post ID and content are required")

        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Comment on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", post_id)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Parent comment", parent_id)
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            author = await self.user_repository.find_by_id(author_id)
            if not author:
                raise NotFoundError("User", author_id)

            now = utc_now()
            if author.is_banned_at(now):
                logfire.warn("Banned user tried to write", author_id=str(author_id))
                raise AccountBanned(author_id)
            try:
                comment = Comment(
                    id=CommentId(new_id()),
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent_id,
                    upvotes=1,  # Author automatically upvotes
                    downvotes=0,
                    score=1,
                    reply_count=0,
                    created_at=now,
                    updated_at=now,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            batch = BatchedMutation(self.document_store, "create_comment")
            batch.set(
                DocumentRef(collection=Collection.COMMENTS, id=comment.id),
                comment.to_document(),
            )
            apply_counter_effects(
                batch,
                MutationKind.COMMENT_CREATED,
                {
                    CounterTarget.POST: post_id,
                    CounterTarget.PARENT: parent_id,
                    CounterTarget.AUTHOR: author_id,
                },
                now,
            )
            await batch.commit()

            logfire.info(
                "Comment created",
                comment_id=comment.id,
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return comment

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", comment_id)
        return comment

    async def get_comments_for_post(
        self, post_id: PostId, limit: int = 20, offset: int = 0
    ) -> list[Comment]:
        """Get a page of non-deleted comments on a post, newest first.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            limit=limit,
            offset=offset,
        ):
            if not await self.post_repository.find_by_id(post_id):
                raise NotFoundError("Post", post_id)

            comments = await self.comment_repository.find_by_post(
                post_id=post_id, limit=limit, offset=offset
            )
            logfire.info(
                "Comments retrieved for post", post_id=str(post_id), count=len(comments)
            )
            return comments

    async def get_comments_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> list[Comment]:
        """Get a user's non-deleted comments, newest first."""
        return await self.comment_repository.find_by_author(
            author_id, limit=limit, offset=offset
        )

    @staticmethod
    def build_thread(comments: list[Comment]) -> list[CommentThreadNode]:
        """Arrange comments into reply trees.

        Input order is kept at every level. A reply whose parent isn't in
        `comments` (e.g. on another page) is shown as a root.
        """
        nodes = {c.id: CommentThreadNode(comment=c) for c in comments}
        roots: list[CommentThreadNode] = []
        for comment in comments:
            node = nodes[comment.id]
            parent = nodes.get(comment.parent_id) if comment.parent_id else None
            if parent is not None:
                parent.replies.append(node)
            else:
                roots.append(node)
        return roots

    async def update_content(
        self, comment_id: CommentId, user_id: UserId, content: str
    ) -> Comment:
        """Edit a comment's text. Only the author may edit.

        Raises:
            ValidationError: If content is blank
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user isn't the author
            ContentDeletedException: If the comment was deleted
        """
        content = content.strip()
        if not content:
            raise ValidationError("Content is required")

        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            text_length=len(content),
        ):
            comment = await self.get_comment(comment_id)
            if comment.author_id != user_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("comment", comment_id, user_id)
            if comment.is_deleted:
                raise ContentDeletedException("comment", comment_id)

            now = utc_now()
            updated = comment.model_copy(
                update={"content": content, "is_edited": True, "updated_at": now}
            )
            batch = BatchedMutation(self.document_store, "update_comment")
            batch.update(
                DocumentRef(collection=Collection.COMMENTS, id=comment_id),
                {"content": content, "is_edited": True, "updated_at": now},
            )
            await batch.commit()

            logfire.info("Comment text updated", comment_id=str(comment_id))
            return updated

    async def delete_comment(
        self, comment_id: CommentId, user_id: UserId, is_admin: bool = False
    ) -> None:
        """Soft-delete a comment. Allowed for the author and admins.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.get_comment(comment_id)
            if comment.author_id != user_id and not is_admin:
                raise NotAuthorizedError("comment", comment_id, user_id, action="delete")

            batch = BatchedMutation(self.document_store, "delete_comment")
            batch.update(
                DocumentRef(collection=Collection.COMMENTS, id=comment_id),
                {"is_deleted": True, "updated_at": utc_now()},
            )
            await batch.commit()
            logfire.info("Comment deleted", comment_id=str(comment_id))
