from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, validation_error
from src.domain.actor import Actor
from src.domain.entities import User, UserRole

from .dtos import UserInfo

SELF_ASSIGNABLE_ROLES = (UserRole.OWNER, UserRole.CLEANER)


class SetRoleUseCase:
    """
    Use case for a user choosing their own role after sign-up.

    Business Rules:
    - Only OWNER or CLEANER can be chosen
    - Admins cannot change their own role here
    - The role is locked once the user owns a business
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, role: str) -> Result[UserInfo]:
        try:
            new_role = UserRole(role)
        except ValueError:
            new_role = None
        if new_role not in SELF_ASSIGNABLE_ROLES:
            return Return.err(
                validation_error({"role": ["Role must be OWNER or CLEANER"]}, "Invalid role")
            )

        if actor.role == UserRole.ADMIN:
            return Return.err(FORBIDDEN)

        async with self.uow:
            business = await self.uow.businesses.get_by_owner(actor.id)
            if business is not None and new_role != UserRole.OWNER:
                return Return.err(
                    Error("ROLE_LOCKED", "Role cannot be changed after creating a business")
                )

            user = await self.uow.users.get_by_id(actor.id)
            if user is None:
                user = await self.uow.users.create(
                    User(id=actor.id, email=actor.email, role=new_role)
                )
            else:
                user.role = new_role
                user = await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(UserInfo(id=str(user.id), email=user.email, role=user.role.value))
