"""Admin use cases."""

from .feature_post import FeaturePostRequest, FeaturePostResponse, FeaturePostUseCase
from .get_stats import GetStatsResponse, GetStatsUseCase, StatsView
from .list_users import ListUsersRequest, ListUsersResponse, ListUsersUseCase
from .moderate_user import (
    BanUserRequest,
    BanUserUseCase,
    ModerateUserRequest,
    ModerateUserResponse,
    SetAdminRequest,
    SetAdminUseCase,
    UnbanUserUseCase,
)

__all__ = [
    "BanUserRequest",
    "BanUserUseCase",
    "FeaturePostRequest",
    "FeaturePostResponse",
    "FeaturePostUseCase",
    "GetStatsResponse",
    "GetStatsUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "ModerateUserRequest",
    "ModerateUserResponse",
    "SetAdminRequest",
    "SetAdminUseCase",
    "StatsView",
    "UnbanUserUseCase",
]
