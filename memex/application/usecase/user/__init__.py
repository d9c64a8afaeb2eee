"""User use cases."""

from .get_user_comments import (
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
)
from .get_user_posts import GetUserPostsRequest, GetUserPostsResponse, GetUserPostsUseCase
from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from .search_users import SearchUsersRequest, SearchUsersResponse, SearchUsersUseCase

__all__ = [
    "GetUserCommentsRequest",
    "GetUserCommentsResponse",
    "GetUserCommentsUseCase",
    "GetUserPostsRequest",
    "GetUserPostsResponse",
    "GetUserPostsUseCase",
    "GetUserProfileRequest",
    "GetUserProfileResponse",
    "GetUserProfileUseCase",
    "SearchUsersRequest",
    "SearchUsersResponse",
    "SearchUsersUseCase",
]
