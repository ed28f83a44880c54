import logging

from libs.result import Error, Result, Return
from src.app.services.errors import ProviderError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import dependency_error
from src.domain.base import utc_now
from src.domain.entities import InvitationStatus

from .dtos import AcceptInvitationResponse
from .invite_cleaner_use_case import hash_token

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting a cleaner invitation.

    Business Rules:
    - Token must match a PENDING invitation
    - Expired invitations are marked EXPIRED and rejected
    - The chosen password is set at the identity provider
    - Invitation becomes ACCEPTED (single use)
    """

    def __init__(self, uow: UnitOfWork, identity: IIdentityProvider):
        self.uow = uow
        self.identity = identity

    async def execute(self, token: str, password: str) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is None or invitation.status != InvitationStatus.PENDING:
                return Return.err(
                    Error("INVALID_INVITATION", "Invitation is invalid or already used")
                )

            if invitation.expires_at < utc_now():
                invitation.status = InvitationStatus.EXPIRED
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
                return Return.err(Error("INVITATION_EXPIRED", "Invitation has expired"))

            try:
                await self.identity.update_password(invitation.cleaner_id, password)
            except ProviderError as exc:
                logger.error(f"Setting password for invitation {invitation.id} failed: {exc}")
                return Return.err(dependency_error(exc))

            invitation.status = InvitationStatus.ACCEPTED
            invitation = await self.uow.invitations.update(invitation)
            await self.uow.commit()

            return Return.ok(
                AcceptInvitationResponse(status=invitation.status.value, email=invitation.email)
            )
