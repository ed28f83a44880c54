"""
Staff Roster Use Cases
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    BusinessSummary,
    CleanerBusinessResponse,
    CleanerResponse,
    InvitationInfo,
    InviteCleanerResponse,
    RemoveCleanerResponse,
)
from .get_cleaner_business_use_case import GetCleanerBusinessUseCase
from .invite_cleaner_use_case import InviteCleanerUseCase, generate_temporary_password
from .list_cleaners_use_case import ListCleanersUseCase
from .manage_cleaner_use_case import (
    ActivateCleanerUseCase,
    DeactivateCleanerUseCase,
    RemoveCleanerUseCase,
)

__all__ = [
    "InviteCleanerUseCase",
    "AcceptInvitationUseCase",
    "ListCleanersUseCase",
    "DeactivateCleanerUseCase",
    "ActivateCleanerUseCase",
    "RemoveCleanerUseCase",
    "GetCleanerBusinessUseCase",
    "generate_temporary_password",
    "CleanerResponse",
    "InviteCleanerResponse",
    "InvitationInfo",
    "AcceptInvitationResponse",
    "BusinessSummary",
    "CleanerBusinessResponse",
    "RemoveCleanerResponse",
]
