"""User aggregate root.

Users sign in through Firebase; their id is the identity provider's uid.
Karma counts contributions: one point per post or comment created.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from memex.domain.model.common import DomainModel, utc_now
from memex.domain.value import CommunityId, UserId


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    email: Optional[str] = None
    display_name: str = Field(default="Anonymous", min_length=1, max_length=100)
    bio: str = Field(default="", max_length=500)
    photo_url: str = ""
    karma: int = Field(default=0, ge=0)
    joined_communities: list[CommunityId] = Field(default_factory=list)
    is_admin: bool = False
    is_banned: bool = False
    ban_reason: Optional[str] = None
    banned_until: Optional[datetime] = None  # None with is_banned means permanent
    banned_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def is_banned_at(self, now: datetime) -> bool:
        """Whether a ban is in force at `now`; a lapsed temporary ban is not."""
        if not self.is_banned:
            return False
        return self.banned_until is None or now < self.banned_until
