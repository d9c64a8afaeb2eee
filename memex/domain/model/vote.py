"""Vote entity.

A user holds at most one vote per post or comment. The vote id is the
composite `{subject_id}_{user_id}` key, so writing a vote is an upsert and
a second record for the same pair cannot exist.
"""

from datetime import datetime

from pydantic import Field, model_validator

from memex.domain.model.common import DomainModel, utc_now
from memex.domain.value import SubjectKind, UserId, VoteId, VoteType, vote_key


class Vote(DomainModel):
    """Vote entity."""

    id: VoteId
    subject_kind: SubjectKind
    subject_id: str
    user_id: UserId
    type: VoteType
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_key(self) -> "Vote":
        """Vote id must be the composite subject/user key."""
        if self.id != vote_key(self.subject_id, self.user_id):
            raise ValueError("Vote id must be '{subject_id}_{user_id}'")
        return self

    @classmethod
    def cast(
        cls,
        subject_kind: SubjectKind,
        subject_id: str,
        user_id: UserId,
        vote_type: VoteType,
        created_at: datetime,
    ) -> "Vote":
        """Build a vote record keyed by subject and user."""
        return cls(
            id=vote_key(subject_id, user_id),
            subject_kind=subject_kind,
            subject_id=subject_id,
            user_id=user_id,
            type=vote_type,
            created_at=created_at,
        )
