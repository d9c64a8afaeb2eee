"""Community use cases."""

from .create_community import (
    CreateCommunityRequest,
    CreateCommunityResponse,
    CreateCommunityUseCase,
)
from .get_community import GetCommunityRequest, GetCommunityResponse, GetCommunityUseCase
from .get_joined_communities import (
    GetJoinedCommunitiesRequest,
    GetJoinedCommunitiesResponse,
    GetJoinedCommunitiesUseCase,
)
from .list_communities import (
    ListCommunitiesRequest,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)
from .membership import (
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    MembershipRequest,
    MembershipResponse,
)

__all__ = [
    "CreateCommunityRequest",
    "CreateCommunityResponse",
    "CreateCommunityUseCase",
    "GetCommunityRequest",
    "GetCommunityResponse",
    "GetCommunityUseCase",
    "GetJoinedCommunitiesRequest",
    "GetJoinedCommunitiesResponse",
    "GetJoinedCommunitiesUseCase",
    "JoinCommunityUseCase",
    "LeaveCommunityUseCase",
    "ListCommunitiesRequest",
    "ListCommunitiesResponse",
    "ListCommunitiesUseCase",
    "MembershipRequest",
    "MembershipResponse",
]
