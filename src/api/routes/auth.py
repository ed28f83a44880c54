from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import to_http_error
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ChangePasswordUseCase,
    ForgotPasswordUseCase,
    GetMeUseCase,
    MeResponse,
    SetRoleUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
    StatusResponse,
    UserInfo,
)
from src.depends import (
    get_current_user,
    get_email_sender,
    get_identity_provider,
    get_tenant_resolver,
    get_unit_of_work,
)
from src.domain.actor import Actor

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")


class SetRoleRequest(BaseModel):
    """Role chosen after sign-up (OWNER or CLEANER)"""

    role: str = Field(..., description="OWNER or CLEANER")


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IIdentityProvider = Depends(get_identity_provider),
):
    """
    User Signup

    Creates a confirmed account at the identity provider and a local OWNER user.

    Raises:
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 422 Unprocessable Entity: Invalid input
        - 502 Bad Gateway: Identity provider unavailable
    """
    command = SignupCommand(email=request.email, password=request.password)

    result = await SignupUseCase(uow, identity).execute(command)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/me", response_model=MeResponse)
async def get_me(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Current user with the business they act for (if any)

    Raises:
        - 401 Unauthorized: Missing or invalid token
    """
    result = await GetMeUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/set-role", response_model=UserInfo)
async def set_role(
    request: SetRoleRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Choose OWNER or CLEANER

    Raises:
        - 403 Forbidden: Admins cannot change their role
        - 400 Bad Request: ROLE_LOCKED once a business exists
        - 422 Unprocessable Entity: Unknown role
    """
    result = await SetRoleUseCase(uow).execute(actor, request.role)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/change-password", response_model=StatusResponse)
async def change_password(
    request: ChangePasswordRequest,
    actor: Actor = Depends(get_current_user),
    identity: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Change the caller's password

    Raises:
        - 400 Bad Request: INVALID_CURRENT_PASSWORD
        - 422 Unprocessable Entity: New password equals the current one
        - 502 Bad Gateway: Identity provider unavailable
    """
    result = await ChangePasswordUseCase(identity).execute(
        actor, request.current_password, request.new_password
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/forgot-password", response_model=StatusResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    identity: IIdentityProvider = Depends(get_identity_provider),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Email a password recovery link

    Always answers with the same message so account existence is not disclosed.
    """
    use_case = ForgotPasswordUseCase(identity, email_sender, ApplicationConfig.FRONTEND_URL)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
