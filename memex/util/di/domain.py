"""Domain layer DI providers."""

from dishka import Scope, provide

from memex.config import MediaSettings, RankingSettings
from memex.domain.repository import (
    CommentRepository,
    CommunityRepository,
    DocumentStore,
    MembershipRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from memex.domain.service import (
    CommentService,
    CommunityService,
    IdentityService,
    MediaHost,
    MediaService,
    ModerationService,
    PostService,
    ScoreAggregator,
    TokenVerifier,
    UserService,
    VoteLedger,
    VoteService,
)
from memex.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_score_aggregator(self, ranking: RankingSettings) -> ScoreAggregator:
        """Provide score aggregator (stateless, shared)."""
        return ScoreAggregator(ranking=ranking)

    @provide
    def get_vote_ledger(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> VoteLedger:
        """Provide vote ledger."""
        return VoteLedger(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_vote_service(
        self,
        vote_ledger: VoteLedger,
        score_aggregator: ScoreAggregator,
        document_store: DocumentStore,
        user_repository: UserRepository,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_ledger=vote_ledger,
            score_aggregator=score_aggregator,
            document_store=document_store,
            user_repository=user_repository,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        community_repository: CommunityRepository,
        user_repository: UserRepository,
        score_aggregator: ScoreAggregator,
        document_store: DocumentStore,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            community_repository=community_repository,
            user_repository=user_repository,
            score_aggregator=score_aggregator,
            document_store=document_store,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        document_store: DocumentStore,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            user_repository=user_repository,
            document_store=document_store,
        )

    @provide
    def get_community_service(
        self,
        community_repository: CommunityRepository,
        membership_repository: MembershipRepository,
        user_repository: UserRepository,
        document_store: DocumentStore,
    ) -> CommunityService:
        """Provide community domain service."""
        return CommunityService(
            community_repository=community_repository,
            membership_repository=membership_repository,
            user_repository=user_repository,
            document_store=document_store,
        )

    @provide
    def get_user_service(
        self, user_repository: UserRepository, document_store: DocumentStore
    ) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository, document_store=document_store)

    @provide
    def get_moderation_service(
        self,
        user_repository: UserRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        community_repository: CommunityRepository,
        document_store: DocumentStore,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            user_repository=user_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            community_repository=community_repository,
            document_store=document_store,
        )

    @provide
    def get_identity_service(self, token_verifier: TokenVerifier) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(token_verifier=token_verifier)

    @provide
    def get_media_service(
        self, media_host: MediaHost, media_settings: MediaSettings
    ) -> MediaService:
        """Provide media domain service."""
        return MediaService(
            media_host=media_host, max_upload_bytes=media_settings.max_upload_bytes
        )
