"""Domain services."""

from .base import Service
from .comment_service import CommentService, CommentThreadNode
from .community_service import CommunityService
from .counter_effects import COUNTER_EFFECTS, MutationKind, apply_counter_effects
from .identity_service import IdentityService, TokenVerifier
from .media_service import MediaHost, MediaService
from .moderation_service import ModerationService, SiteStats
from .post_service import PostService
from .score_aggregator import ScoreAggregator, ScoreUpdate
from .user_service import UserService
from .vote_ledger import VoteLedger, VoteOutcome
from .vote_service import VoteResult, VoteService

__all__ = [
    "COUNTER_EFFECTS",
    "CommentService",
    "CommentThreadNode",
    "CommunityService",
    "IdentityService",
    "MediaHost",
    "MediaService",
    "ModerationService",
    "MutationKind",
    "PostService",
    "ScoreAggregator",
    "ScoreUpdate",
    "Service",
    "SiteStats",
    "TokenVerifier",
    "UserService",
    "VoteLedger",
    "VoteOutcome",
    "VoteResult",
    "VoteService",
    "apply_counter_effects",
]
