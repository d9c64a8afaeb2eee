"""Repository interfaces for the MemeX domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from memex.domain.repository.comment import CommentRepository
from memex.domain.repository.community import CommunityRepository, MembershipRepository
from memex.domain.repository.document_store import DocumentStore
from memex.domain.repository.post import PostRepository, PostSortOrder
from memex.domain.repository.user import UserRepository
from memex.domain.repository.vote import VoteRepository

__all__ = [
    "DocumentStore",
    "UserRepository",
    "PostRepository",
    "PostSortOrder",
    "CommentRepository",
    "VoteRepository",
    "CommunityRepository",
    "MembershipRepository",
]
