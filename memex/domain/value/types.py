"""Domain value objects for MemeX.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from memex.domain.value.common import RootValueObject, ValueObject


class VoteType(str, Enum):
    """Direction of a recorded vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class VoteAction(str, Enum):
    """What a user asks for when voting.

    `REMOVE` clears the user's vote; the others replace it.
    """

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"
    REMOVE = "remove"

    @property
    def vote_type(self) -> VoteType | None:
        """Vote type recorded by this action (None for removal)."""
        if self is VoteAction.REMOVE:
            return None
        return VoteType(self.value)


class SubjectKind(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class MediaType(str, Enum):
    """Kind of media attached to a post."""

    IMAGE = "image"
    VIDEO = "video"

    @classmethod
    def from_mimetype(cls, mimetype: str) -> "MediaType":
        """Classify a MIME type.

        Raises:
            ValueError: If the MIME type is neither image/* nor video/*
        """
        if mimetype.startswith("video/"):
            return cls.VIDEO
        if mimetype.startswith("image/"):
            return cls.IMAGE
        raise ValueError("Only image and video files are allowed")


class MembershipRole(str, Enum):
    """Role of a user inside a community."""

    MEMBER = "member"
    MODERATOR = "moderator"


class CommunityName(RootValueObject[str]):
    """Unique community name.

    Lowercase letters, digits and underscores, 3-21 characters.
    Examples: 'dankmemes', 'cats_of_memex'
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        """Lower-case and trim the raw value."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_community_name(cls, v: str) -> str:
        """Validate community name format."""
        if not re.match(r"^[a-z0-9_]{3,21}$", v):
            raise ValueError(
                "Community name must be 3-21 characters and contain only "
                "letters, numbers, and underscores"
            )
        return v


class UploadedMedia(ValueObject):
    """Result of a media upload."""

    url: str
    type: MediaType
    public_id: str | None = None


class VerifiedIdentity(ValueObject):
    """Identity extracted from a verified ID token."""

    uid: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None
    is_admin: bool = False
