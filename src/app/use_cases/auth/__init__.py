"""
Authentication Use Cases

All authentication-related business logic.
"""

from .authenticate_use_case import AuthenticateUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import MeResponse, SignupCommand, SignupResponse, StatusResponse, UserInfo
from .forgot_password_use_case import ForgotPasswordUseCase
from .get_me_use_case import GetMeUseCase
from .set_role_use_case import SetRoleUseCase
from .signup_use_case import SignupUseCase

__all__ = [
    # Use Cases
    "AuthenticateUseCase",
    "SignupUseCase",
    "GetMeUseCase",
    "SetRoleUseCase",
    "ChangePasswordUseCase",
    "ForgotPasswordUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "SignupResponse",
    "MeResponse",
    "StatusResponse",
    "UserInfo",
]
