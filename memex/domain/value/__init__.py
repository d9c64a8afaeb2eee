"""Domain value objects for MemeX."""

from memex.domain.value.identifiers import (
    CommentId,
    CommunityId,
    MembershipId,
    PostId,
    UserId,
    VoteId,
    membership_key,
    new_id,
    vote_key,
)
from memex.domain.value.types import (
    CommunityName,
    MediaType,
    MembershipRole,
    SubjectKind,
    UploadedMedia,
    VerifiedIdentity,
    VoteAction,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "CommunityId",
    "VoteId",
    "MembershipId",
    "vote_key",
    "membership_key",
    "new_id",
    # Types
    "CommunityName",
    "MediaType",
    "MembershipRole",
    "SubjectKind",
    "UploadedMedia",
    "VerifiedIdentity",
    "VoteAction",
    "VoteType",
]
