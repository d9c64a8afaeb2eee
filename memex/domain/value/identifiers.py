"""Strongly typed identifiers for MemeX domain entities.

Identifiers are opaque strings: user ids come from the identity provider,
the others are generated by the application. Vote and membership ids are
composite keys built from the ids they join.
"""

from typing import NewType
from uuid import uuid4

UserId = NewType("UserId", str)
PostId = NewType("PostId", str)
CommentId = NewType("CommentId", str)
CommunityId = NewType("CommunityId", str)
VoteId = NewType("VoteId", str)
MembershipId = NewType("MembershipId", str)


def new_id() -> str:
    """Generate a document id (32 hex characters, no separators)."""
    return uuid4().hex


def vote_key(subject_id: str, user_id: UserId) -> VoteId:
    """Build the composite vote key for a (subject, user) pair."""
    return VoteId(f"{subject_id}_{user_id}")


def membership_key(community_id: CommunityId, user_id: UserId) -> MembershipId:
    """Build the composite membership key for a (community, user) pair."""
    return MembershipId(f"{community_id}_{user_id}")
