"""
Dashboard Use Cases
"""

from .dtos import DashboardStatsResponse
from .get_dashboard_stats_use_case import GetDashboardStatsUseCase

__all__ = ["GetDashboardStatsUseCase", "DashboardStatsResponse"]
