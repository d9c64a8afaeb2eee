"""Domain models for MemeX."""

from memex.domain.model.comment import Comment
from memex.domain.model.common import DomainModel, VotableModel, utc_now
from memex.domain.model.community import Community, Membership
from memex.domain.model.post import Post
from memex.domain.model.user import User
from memex.domain.model.vote import Vote

__all__ = [
    "DomainModel",
    "VotableModel",
    "utc_now",
    "User",
    "Post",
    "Comment",
    "Vote",
    "Community",
    "Membership",
]
