"""
Subscription Use Cases
"""

from .dtos import SubscriptionResponse, UsageEntry, UsageStatsResponse
from .subscription_use_cases import (
    CancelSubscriptionUseCase,
    GetSubscriptionUseCase,
    GetUsageStatsUseCase,
    UpdateSubscriptionUseCase,
)
from .usage import get_or_create_subscription, track_job_usage

__all__ = [
    "GetSubscriptionUseCase",
    "UpdateSubscriptionUseCase",
    "CancelSubscriptionUseCase",
    "GetUsageStatsUseCase",
    "SubscriptionResponse",
    "UsageEntry",
    "UsageStatsResponse",
    "get_or_create_subscription",
    "track_job_usage",
]
