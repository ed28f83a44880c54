import logging

from libs.result import Error, Result, Return
from src.app.services.errors import IdentityExistsError, ProviderError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import dependency_error
from src.domain.entities import User, UserRole

from .dtos import SignupCommand, SignupResponse, UserInfo

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Reject emails that already have a local user
    2. Create a confirmed account at the identity provider
    3. Create the local User with role OWNER, keyed by the provider's id
    4. Commit
    """

    def __init__(self, uow: UnitOfWork, identity: IIdentityProvider):
        self.uow = uow
        self.identity = identity

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            try:
                identity_user = await self.identity.create_user(command.email, command.password)
            except IdentityExistsError:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))
            except ProviderError as exc:
                logger.error(f"Sign-up failed at identity provider: {exc}")
                return Return.err(dependency_error(exc))

            user = await self.uow.users.create(
                User(id=identity_user.id, email=command.email, role=UserRole.OWNER)
            )
            await self.uow.commit()

            return Return.ok(
                SignupResponse(
                    user=UserInfo(id=str(user.id), email=user.email, role=user.role.value)
                )
            )
