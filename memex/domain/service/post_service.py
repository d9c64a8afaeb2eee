"""Post domain service."""

import logfire

from memex.domain.batch import BatchedMutation
from memex.domain.error import (
    AccountBanned,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from memex.domain.model.common import utc_now
from memex.domain.model.post import Post
from memex.domain.repository import (
    CommunityRepository,
    DocumentStore,
    PostRepository,
    PostSortOrder,
    UserRepository,
)
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import CommunityId, PostId, UploadedMedia, UserId, new_id

from .base import Service
from .counter_effects import CounterTarget, MutationKind, apply_counter_effects
from .score_aggregator import ScoreAggregator


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim, lower-case and de-duplicate tags, keeping their order."""
    seen: list[str] = []
    for tag in tags or []:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        community_repository: CommunityRepository,
        user_repository: UserRepository,
        score_aggregator: ScoreAggregator,
        document_store: DocumentStore,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            community_repository: Community repository
            user_repository: User repository
            score_aggregator: Computes the initial hot score
            document_store: Store that commits post batches
        """
        self.post_repository = post_repository
        self.community_repository = community_repository
        self.user_repository = user_repository
        self.score_aggregator = score_aggregator
        self.document_store = document_store

    async def create_post(
        self,
        author_id: UserId,
        title: str,
        community_id: CommunityId,
        content: str = "",
        tags: list[str] | None = None,
        media: UploadedMedia | None = None,
    ) -> Post:
        """Create a post in a community.

        The post starts with the author's implicit upvote. The author's
        karma and the community's post count move in the same batch.

        Args:
            author_id: Author user ID
            title: Post title
            community_id: Target community
            content: Optional body text
            tags: Optional tags
            media: Previously uploaded image or video

        Returns:
            Created post

        Raises:
            ValidationError: If title or community is missing
            NotFoundError: If the community or the author's profile doesn't exist
            AccountBanned: If the author is banned
            BatchCommitFailed: If the store rejected the write
        """
        title = title.strip()
        if not title or not community_id:
            raise ValidationError("Title and community are required")

        with logfire.span(
            "post_service.create_post",
            author_id=str(author_id),
            community_id=str(community_id),
        ):
            community = await self.community_repository.find_by_id(community_id)
            if not community or not community.is_active:
                raise NotFoundError("Community", community_id)

            author = await self.user_repository.find_by_id(author_id)
            if not author:
                raise NotFoundError("User", author_id)

            now = utc_now()
            if author.is_banned_at(now):
                logfire.warn("Banned user tried to write", author_id=str(author_id))
                raise AccountBanned(author_id)
            try:
                post = Post(
                    id=PostId(new_id()),
                    title=title,
                    content=content.strip(),
                    community_id=community_id,
                    tags=normalize_tags(tags),
                    author_id=author_id,
                    media_url=media.url if media else None,
                    media_type=media.type if media else None,
                    upvotes=1,  # Author automatically upvotes
                    downvotes=0,
                    score=1,
                    hot_score=self.score_aggregator.hot_score(1, now, now),
                    comment_count=0,
                    created_at=now,
                    updated_at=now,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            batch = BatchedMutation(self.document_store, "create_post")
            batch.set(DocumentRef(collection=Collection.POSTS, id=post.id), post.to_document())
            apply_counter_effects(
                batch,
                MutationKind.POST_CREATED,
                {CounterTarget.AUTHOR: author_id, CounterTarget.COMMUNITY: community_id},
                now,
            )
            await batch.commit()

            logfire.info("Post created", post_id=post.id, community_id=community_id)
            return post

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", post_id)
            return post

    async def list_posts(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community_id: CommunityId | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """List non-deleted posts.

        Args:
            sort: hot, new or top
            community_id: Optional community filter
            limit: Page size
            offset: Number of posts to skip

        Returns:
            Posts in the requested order
        """
        with logfire.span(
            "post_service.list_posts",
            sort=sort.value,
            community_id=community_id,
            limit=limit,
            offset=offset,
        ):
            posts = await self.post_repository.find_all(
                sort=sort, community_id=community_id, limit=limit, offset=offset
            )
            logfire.info("Posts listed", count=len(posts))
            return posts

    async def list_posts_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> list[Post]:
        """List a user's non-deleted posts, newest first."""
        return await self.post_repository.find_by_author(
            author_id, limit=limit, offset=offset
        )

    async def find_by_ids(self, post_ids: list[PostId]) -> dict[PostId, Post]:
        """Load several posts (deleted ones included), skipping unknown ids."""
        unique = list(dict.fromkeys(post_ids))
        if not unique:
            return {}
        return await self.post_repository.find_by_ids(unique)

    async def delete_post(
        self, post_id: PostId, user_id: UserId, is_admin: bool = False
    ) -> None:
        """Soft-delete a post.

        Args:
            post_id: Post ID
            user_id: User asking for the deletion
            is_admin: Whether that user is an administrator

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
        """
        with logfire.span(
            "post_service.delete_post", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.get_post(post_id)
            if post.author_id != user_id and not is_admin:
                logfire.warn(
                    "Unauthorized post deletion attempt",
                    post_id=str(post_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("post", post_id, user_id, action="delete")

            batch = BatchedMutation(self.document_store, "delete_post")
            batch.update(
                DocumentRef(collection=Collection.POSTS, id=post_id),
                {"is_deleted": True, "updated_at": utc_now()},
            )
            await batch.commit()
            logfire.info("Post deleted", post_id=str(post_id), by_admin=post.author_id != user_id)
