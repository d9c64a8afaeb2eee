"""In-memory vote repository for testing."""

from typing import List, Optional, Sequence

from memex.domain.model import Vote
from memex.domain.repository import VoteRepository
from memex.domain.repository.document_store import Collection, DocumentRef
from memex.domain.value import SubjectKind, UserId, vote_key
from memex.persistence.mappers import row_to_vote

from .database import InMemoryDatabase

VOTE_COLLECTIONS = {
    SubjectKind.POST: Collection.POST_VOTES,
    SubjectKind.COMMENT: Collection.COMMENT_VOTES,
}


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find(
        self, subject_kind: SubjectKind, subject_id: str, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote by its composite key."""
        row = self.database.get(
            DocumentRef(
                collection=VOTE_COLLECTIONS[subject_kind],
                id=vote_key(subject_id, user_id),
            )
        )
        return row_to_vote(row) if row else None

    async def find_by_user_and_subjects(
        self,
        subject_kind: SubjectKind,
        user_id: UserId,
        subject_ids: Sequence[str],
    ) -> List[Vote]:
        """Find a user's votes on multiple items."""
        wanted = set(subject_ids)
        return [
            row_to_vote(row)
            for row in self.database.all(VOTE_COLLECTIONS[subject_kind])
            if row["user_id"] == user_id and row["subject_id"] in wanted
        ]
