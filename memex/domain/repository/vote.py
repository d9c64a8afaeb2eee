"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from memex.domain.model.vote import Vote
from memex.domain.value import SubjectKind, UserId


class VoteRepository(ABC):
    """Read side of the Vote entity.

    Post votes and comment votes are stored apart, so every lookup names
    the subject kind.
    """

    @abstractmethod
    async def find(
        self, subject_kind: SubjectKind, subject_id: str, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific post or comment.

        Args:
            subject_kind: Post or comment
            subject_id: ID of the post or comment
            user_id: The voter's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_subjects(
        self,
        subject_kind: SubjectKind,
        user_id: UserId,
        subject_ids: Sequence[str],
    ) -> List[Vote]:
        """Find a user's votes on several items (batch query).

        Args:
            subject_kind: Post or comment
            user_id: The voter's ID
            subject_ids: IDs of the items to check

        Returns:
            Votes by the user on the given items
        """
        pass
