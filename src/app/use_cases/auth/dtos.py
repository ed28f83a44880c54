"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """Validated sign-up intent"""

    email: EmailStr
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Local user record"""

    id: str
    email: str
    role: str


class SignupResponse(BaseModel):
    """Response for sign-up use case"""

    user: UserInfo


class MeResponse(BaseModel):
    """The authenticated user and the business they act for"""

    id: str
    email: str
    role: str
    business_id: Optional[str] = None
    created_at: Optional[datetime] = None


class StatusResponse(BaseModel):
    """Generic acknowledgement"""

    status: str
    message: str
