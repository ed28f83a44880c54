import logging

from libs.result import Error, Result, Return
from src.app.services.errors import ProviderError
from src.app.services.identity_provider import IIdentityProvider
from src.app.use_cases.common import dependency_error, validation_error
from src.domain.actor import Actor

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the caller's password.

    Business Rules:
    - The current password is checked by signing in at the identity provider
    - The new password is then set through the admin API
    """

    def __init__(self, identity: IIdentityProvider):
        self.identity = identity

    async def execute(
        self, actor: Actor, current_password: str, new_password: str
    ) -> Result[StatusResponse]:
        if current_password == new_password:
            return Return.err(
                validation_error({"new_password": ["New password must differ from the current one"]})
            )

        try:
            if not await self.identity.verify_password(actor.email, current_password):
                return Return.err(
                    Error("INVALID_CURRENT_PASSWORD", "Current password is incorrect")
                )
            await self.identity.update_password(actor.id, new_password)
        except ProviderError as exc:
            logger.error(f"Password change for {actor.id} failed: {exc}")
            return Return.err(dependency_error(exc))

        return Return.ok(StatusResponse(status="ok", message="Password updated successfully"))
