"""
Invite Cleaner Use Case

Adds a cleaner to the owner's staff roster, provisioning an account and an
invitation link when the email is new.
"""

import hashlib
import logging
import secrets
import string
from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.errors import IdentityExistsError, ProviderError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, dependency_error
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.entities import (
    BusinessCleaner,
    CleanerInvitation,
    CleanerStatus,
    User,
    UserRole,
)
from src.domain.permissions import Action, can

from .dtos import CleanerResponse, InvitationInfo, InviteCleanerResponse

logger = logging.getLogger(__name__)

PASSWORD_SYMBOLS = "!@#$%^&*"
_PASSWORD_CLASSES = (
    string.ascii_uppercase,
    string.ascii_lowercase,
    string.digits,
    PASSWORD_SYMBOLS,
)


def generate_temporary_password(length: int = 16) -> str:
    """Random password with at least one upper, lower, digit and symbol"""
    alphabet = "".join(_PASSWORD_CLASSES)
    chars = [secrets.choice(group) for group in _PASSWORD_CLASSES]
    chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class InviteCleanerUseCase:
    """
    Use case for inviting a cleaner.

    Business Rules:
    - Only owners/admins can manage the roster
    - Owners cannot be added as cleaners (BadRequest)
    - A cleaner already on this roster is a Conflict
    - A cleaner ACTIVE at another business is a Conflict (one ACTIVE link per cleaner)
    - New emails get an identity with a random password that is never returned,
      a local CLEANER user, and a single-use invitation link (SHA-256 stored)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tenants: TenantResolver,
        identity: IIdentityProvider,
        email_sender: IEmailSender,
        frontend_url: str,
        invitation_ttl_days: int = 7,
    ):
        self.uow = uow
        self.tenants = tenants
        self.identity = identity
        self.email_sender = email_sender
        self.frontend_url = frontend_url.rstrip("/")
        self.invitation_ttl = timedelta(days=invitation_ttl_days)

    async def execute(
        self, actor: Actor, email: str, name: Optional[str] = None
    ) -> Result[InviteCleanerResponse]:
        if not can(actor.role, Action.CLEANER_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value
            now = utc_now()

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user is not None:
                if existing_user.role in (UserRole.OWNER, UserRole.ADMIN):
                    return Return.err(
                        Error("CANNOT_ADD_OWNER", "Cannot add an owner as a cleaner")
                    )

                if await self.uow.cleaners.get_link(business_id, existing_user.id):
                    return Return.err(
                        Error("CLEANER_ALREADY_LINKED", "Cleaner is already part of your team")
                    )

                if await self.uow.cleaners.get_first_active(existing_user.id):
                    return Return.err(
                        Error(
                            "CLEANER_ACTIVE_ELSEWHERE",
                            "Cleaner is currently active for another business",
                        )
                    )

                link = await self.uow.cleaners.create(
                    BusinessCleaner(
                        business_id=business_id,
                        cleaner_id=existing_user.id,
                        status=CleanerStatus.ACTIVE,
                        invited_by=actor.id,
                        activated_at=now,
                    )
                )
                await self.uow.commit()

                logger.info(f"Linked existing cleaner {existing_user.id} to business {business_id}")
                return Return.ok(
                    InviteCleanerResponse(cleaner=CleanerResponse.from_link(link, existing_user))
                )

            try:
                identity_user = await self.identity.create_user(
                    email, generate_temporary_password()
                )
            except IdentityExistsError:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "An account already exists for this email")
                )
            except ProviderError as exc:
                logger.error(f"Provisioning cleaner account failed: {exc}")
                return Return.err(dependency_error(exc))

            cleaner = await self.uow.users.create(
                User(id=identity_user.id, email=email, role=UserRole.CLEANER)
            )
            link = await self.uow.cleaners.create(
                BusinessCleaner(
                    business_id=business_id,
                    cleaner_id=cleaner.id,
                    status=CleanerStatus.ACTIVE,
                    invited_by=actor.id,
                    activated_at=now,
                )
            )

            token = secrets.token_urlsafe(32)
            invitation = await self.uow.invitations.create(
                CleanerInvitation(
                    business_id=business_id,
                    cleaner_id=cleaner.id,
                    email=email,
                    token_hash=hash_token(token),
                    invited_by=actor.id,
                    expires_at=now + self.invitation_ttl,
                )
            )
            business = await self.uow.businesses.get_by_id(business_id)

            await self.uow.commit()

            email_sent = await self._send_invitation(email, name, business.name, token)

            return Return.ok(
                InviteCleanerResponse(
                    cleaner=CleanerResponse.from_link(link, cleaner),
                    invitation=InvitationInfo(
                        id=str(invitation.id),
                        expires_at=invitation.expires_at,
                        email_sent=email_sent,
                    ),
                )
            )

    async def _send_invitation(
        self, email: str, name: Optional[str], business_name: str, token: str
    ) -> bool:
        link = f"{self.frontend_url}/accept-invitation?token={token}"
        greeting = f"Hi {name}," if name else "Hi,"
        try:
            await self.email_sender.send(
                to=email,
                subject=f"You've been invited to join {business_name}",
                html=(
                    f"<p>{greeting}</p>"
                    f"<p>{business_name} has added you to their cleaning team.</p>"
                    f'<p><a href="{link}">Set your password and get started</a></p>'
                    f"<p>This link expires in {self.invitation_ttl.days} days.</p>"
                ),
                text=f"{greeting}\n{business_name} has added you to their team. "
                f"Set your password: {link}",
            )
        except ProviderError as exc:
            logger.warning(f"Invitation email to {email} not sent: {exc}")
            return False
        return True
