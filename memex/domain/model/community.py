"""Community aggregate and membership entity."""

from datetime import datetime

from pydantic import Field, field_validator

from memex.domain.model.common import DomainModel, utc_now
from memex.domain.value import (
    CommunityId,
    CommunityName,
    MembershipId,
    MembershipRole,
    UserId,
    membership_key,
)


class Community(DomainModel):
    """Community aggregate root.

    The creator is the first moderator and first member.
    """

    id: CommunityId
    name: CommunityName
    display_name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    rules: list[str] = Field(default_factory=list)
    creator_id: UserId
    moderators: list[UserId] = Field(default_factory=list)
    member_count: int = Field(default=1, ge=0)
    post_count: int = Field(default=0, ge=0)
    is_active: bool = True
    is_nsfw: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("rules")
    @classmethod
    def drop_blank_rules(cls, v: list[str]) -> list[str]:
        """Strip rules and drop empty ones."""
        return [rule.strip() for rule in v if rule.strip()]


class Membership(DomainModel):
    """A user's membership in a community."""

    id: MembershipId
    community_id: CommunityId
    user_id: UserId
    role: MembershipRole = MembershipRole.MEMBER
    joined_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def join(
        cls,
        community_id: CommunityId,
        user_id: UserId,
        role: MembershipRole,
        joined_at: datetime,
    ) -> "Membership":
        """Build a membership keyed by community and user."""
        return cls(
            id=membership_key(community_id, user_id),
            community_id=community_id,
            user_id=user_id,
            role=role,
            joined_at=joined_at,
        )
