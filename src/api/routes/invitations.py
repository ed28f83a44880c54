from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.cleaners import AcceptInvitationResponse, AcceptInvitationUseCase
from src.depends import get_identity_provider, get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class AcceptInvitationRequest(BaseModel):
    """Token from the invitation email plus the cleaner's chosen password"""

    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, description="New password (min 8 chars)")


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Accept a cleaner invitation (public endpoint)

    Raises:
        - 400 Bad Request: INVALID_INVITATION, INVITATION_EXPIRED
        - 502 Bad Gateway: Identity provider unavailable
    """
    result = await AcceptInvitationUseCase(uow, identity).execute(request.token, request.password)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
