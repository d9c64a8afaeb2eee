"""Get post use case."""

from pydantic import BaseModel

from memex.application.usecase.common import PostView
from memex.domain.repository import VoteRepository
from memex.domain.service import PostService, UserService
from memex.domain.value import PostId, SubjectKind, UserId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """Get post response."""

    post: PostView


class GetPostUseCase:
    """Use case for getting a single post with its author."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
            vote_repository: Vote repository
        """
        self.post_service = post_service
        self.user_service = user_service
        self.vote_repository = vote_repository

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.post_service.get_post(PostId(request.post_id))
        authors = await self.user_service.find_by_ids([post.author_id])

        user_vote = None
        if request.user_id:
            vote = await self.vote_repository.find(
                SubjectKind.POST, post.id, UserId(request.user_id)
            )
            user_vote = vote.type if vote else None

        return GetPostResponse(
            post=PostView.from_post(post, authors.get(post.author_id), user_vote)
        )
