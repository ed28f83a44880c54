"""Admin use cases for platform-wide reporting."""

from .dtos import (
    AdminBusinessDetail,
    AdminBusinessEntry,
    AdminUserEntry,
    BusinessPageResponse,
    Pagination,
    PlatformStatsResponse,
    UserPageResponse,
)
from .platform_use_cases import (
    GetBusinessDetailUseCase,
    GetPlatformStatsUseCase,
    ListBusinessesUseCase,
    ListUsersUseCase,
)

__all__ = [
    "GetPlatformStatsUseCase",
    "ListBusinessesUseCase",
    "GetBusinessDetailUseCase",
    "ListUsersUseCase",
    "PlatformStatsResponse",
    "BusinessPageResponse",
    "AdminBusinessEntry",
    "AdminBusinessDetail",
    "UserPageResponse",
    "AdminUserEntry",
    "Pagination",
]
