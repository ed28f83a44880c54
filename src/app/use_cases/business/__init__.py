"""
Business Use Cases
"""

from .create_business_use_case import CreateBusinessUseCase
from .dtos import BusinessResponse
from .get_business_use_case import GetBusinessUseCase
from .update_business_use_case import ToggleVatUseCase, UpdateBusinessUseCase

__all__ = [
    "CreateBusinessUseCase",
    "GetBusinessUseCase",
    "UpdateBusinessUseCase",
    "ToggleVatUseCase",
    "BusinessResponse",
]
