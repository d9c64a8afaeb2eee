"""Application layer DI providers."""

from dishka import Scope, provide

from memex.application.usecase.admin import (
    BanUserUseCase,
    FeaturePostUseCase,
    GetStatsUseCase,
    ListUsersUseCase,
    SetAdminUseCase,
    UnbanUserUseCase,
)
from memex.application.usecase.auth import (
    GetCurrentUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from memex.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from memex.application.usecase.community import (
    CreateCommunityUseCase,
    GetCommunityUseCase,
    GetJoinedCommunitiesUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    ListCommunitiesUseCase,
)
from memex.application.usecase.media import UploadMediaUseCase
from memex.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from memex.application.usecase.user import (
    GetUserCommentsUseCase,
    GetUserPostsUseCase,
    GetUserProfileUseCase,
    SearchUsersUseCase,
)
from memex.application.usecase.vote import CastVoteUseCase
from memex.domain.repository import VoteRepository
from memex.domain.service import (
    CommentService,
    CommunityService,
    MediaService,
    ModerationService,
    PostService,
    UserService,
    VoteService,
)
from memex.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        vote_repository: VoteRepository,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            user_service=user_service,
            vote_repository=vote_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        vote_repository: VoteRepository,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            user_service=user_service,
            vote_repository=vote_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        comment_service: CommentService,
        user_service: UserService,
        vote_repository: VoteRepository,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service,
            user_service=user_service,
            vote_repository=vote_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_create_community_use_case(
        self, community_service: CommunityService
    ) -> CreateCommunityUseCase:
        """Provide create community use case."""
        return CreateCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_get_community_use_case(
        self, community_service: CommunityService
    ) -> GetCommunityUseCase:
        """Provide get community use case."""
        return GetCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_list_communities_use_case(
        self, community_service: CommunityService
    ) -> ListCommunitiesUseCase:
        """Provide list communities use case."""
        return ListCommunitiesUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_join_community_use_case(
        self, community_service: CommunityService
    ) -> JoinCommunityUseCase:
        """Provide join community use case."""
        return JoinCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_leave_community_use_case(
        self, community_service: CommunityService
    ) -> LeaveCommunityUseCase:
        """Provide leave community use case."""
        return LeaveCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_joined_communities_use_case(
        self, community_service: CommunityService
    ) -> GetJoinedCommunitiesUseCase:
        """Provide joined communities use case."""
        return GetJoinedCommunitiesUseCase(community_service=community_service)

    # Auth and user use cases
    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, user_service: UserService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, user_service: UserService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_user_posts_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> GetUserPostsUseCase:
        """Provide get user posts use case."""
        return GetUserPostsUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_user_comments_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> GetUserCommentsUseCase:
        """Provide get user comments use case."""
        return GetUserCommentsUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_search_users_use_case(self, user_service: UserService) -> SearchUsersUseCase:
        """Provide search users use case."""
        return SearchUsersUseCase(user_service=user_service)

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_ban_user_use_case(
        self, moderation_service: ModerationService
    ) -> BanUserUseCase:
        """Provide ban user use case."""
        return BanUserUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_unban_user_use_case(
        self, moderation_service: ModerationService
    ) -> UnbanUserUseCase:
        """Provide unban user use case."""
        return UnbanUserUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_set_admin_use_case(
        self, moderation_service: ModerationService
    ) -> SetAdminUseCase:
        """Provide grant or revoke admin use case."""
        return SetAdminUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_feature_post_use_case(
        self, moderation_service: ModerationService
    ) -> FeaturePostUseCase:
        """Provide feature post use case."""
        return FeaturePostUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_stats_use_case(self, moderation_service: ModerationService) -> GetStatsUseCase:
        """Provide site stats use case."""
        return GetStatsUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, moderation_service: ModerationService
    ) -> ListUsersUseCase:
        """Provide admin user listing use case."""
        return ListUsersUseCase(moderation_service=moderation_service)

    # Media use cases
    @provide(scope=Scope.REQUEST)
    def get_upload_media_use_case(
        self, media_service: MediaService
    ) -> UploadMediaUseCase:
        """Provide upload media use case."""
        return UploadMediaUseCase(media_service=media_service)
