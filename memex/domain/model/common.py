"""Base models for all domain entities."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from memex.domain.value import SubjectKind, UserId


def utc_now() -> datetime:
    """Current wall-clock time, timezone-aware."""
    return datetime.now(timezone.utc)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    def to_document(self) -> dict[str, Any]:
        """Stored field values (everything but the id)."""
        return {
            key: _plain(value)
            for key, value in self.model_dump(exclude={"id"}).items()
        }


class VotableModel(DomainModel):
    """Content that can be voted on (posts and comments).

    Carries the denormalized vote counters. `score` is always
    `upvotes - downvotes`; a model violating that cannot be built.
    """

    kind: ClassVar[SubjectKind]

    id: str
    author_id: UserId
    upvotes: int = Field(default=1, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 1
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    is_deleted: bool = False

    @model_validator(mode="after")
    def validate_score(self) -> "VotableModel":
        """Score must equal upvotes minus downvotes."""
        if self.score != self.upvotes - self.downvotes:
            raise ValueError(
                f"score ({self.score}) must equal upvotes - downvotes "
                f"({self.upvotes} - {self.downvotes})"
            )
        return self
