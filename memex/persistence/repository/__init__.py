"""PostgreSQL repository implementations."""

from memex.persistence.repository.comment import PostgresCommentRepository
from memex.persistence.repository.community import (
    PostgresCommunityRepository,
    PostgresMembershipRepository,
)
from memex.persistence.repository.document_store import PostgresDocumentStore
from memex.persistence.repository.post import PostgresPostRepository
from memex.persistence.repository.user import PostgresUserRepository
from memex.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresDocumentStore",
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresCommunityRepository",
    "PostgresMembershipRepository",
]
