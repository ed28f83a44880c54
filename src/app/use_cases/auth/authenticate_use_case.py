"""
Authenticate Use Case

Turns a bearer token into the Actor every other use case works with.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.errors import InvalidCredentialsError, ProviderError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import dependency_error
from src.domain.actor import Actor
from src.domain.entities import User, UserRole

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """
    Use case for authenticating a request.

    Business Rules:
    - The identity provider is the only authority on the token
    - The role always comes from the local users table
    - An identity seen for the first time gets a local OWNER row
    """

    def __init__(self, uow: UnitOfWork, identity: IIdentityProvider):
        self.uow = uow
        self.identity = identity

    async def execute(self, token: str) -> Result[Actor]:
        try:
            identity_user = await self.identity.verify_token(token)
        except InvalidCredentialsError:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))
        except ProviderError as exc:
            logger.error(f"Token verification failed: {exc}")
            return Return.err(dependency_error(exc))

        async with self.uow:
            user = await self.uow.users.get_by_id(identity_user.id)
            if user is None:
                user = await self.uow.users.create(
                    User(id=identity_user.id, email=identity_user.email, role=UserRole.OWNER)
                )
                await self.uow.commit()
                logger.info(f"Provisioned local user {user.id}")

            return Return.ok(Actor(id=user.id, email=user.email, role=UserRole(user.role)))
