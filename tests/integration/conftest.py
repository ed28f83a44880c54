from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.errors import IdentityExistsError, InvalidCredentialsError
from src.app.services.identity_provider import IdentityUser, IIdentityProvider
from src.app.services.image_storage import IImageStorage, StoredImage
from src.app.services.payment_gateway import CheckoutSession, IPaymentGateway
from src.depends import (
    get_email_sender,
    get_identity_provider,
    get_image_storage,
    get_payment_gateway,
    get_unit_of_work,
)


class FakeIdentityProvider(IIdentityProvider):
    """In-memory accounts; the bearer token for an email is ``token-<email>``"""

    def __init__(self):
        self.accounts: Dict[str, Dict] = {}

    def token_for(self, email: str) -> str:
        self.accounts.setdefault(email, {"id": uuid4(), "password": None})
        return f"token-{email}"

    def auth(self, email: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(email)}"}

    async def verify_token(self, token: str) -> IdentityUser:
        email = token[len("token-"):] if token.startswith("token-") else None
        if email not in self.accounts:
            raise InvalidCredentialsError()
        return IdentityUser(id=self.accounts[email]["id"], email=email)

    async def create_user(self, email: str, password: str) -> IdentityUser:
        if email in self.accounts:
            raise IdentityExistsError()
        self.accounts[email] = {"id": uuid4(), "password": password}
        return IdentityUser(id=self.accounts[email]["id"], email=email)

    async def update_password(self, user_id: UUID, password: str) -> None:
        for account in self.accounts.values():
            if account["id"] == user_id:
                account["password"] = password

    async def verify_password(self, email: str, password: str) -> bool:
        account = self.accounts.get(email)
        return account is not None and account["password"] == password

    async def generate_recovery_link(self, email: str, redirect_to: str) -> Optional[str]:
        if email not in self.accounts:
            return None
        return f"{redirect_to}#recovery-{email}"


class FakeEmailSender(IEmailSender):
    def __init__(self):
        self.sent: List[Dict] = []

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})


class FakeImageStorage(IImageStorage):
    def __init__(self):
        self.files: Dict[str, bytes] = {}

    async def upload(self, content: bytes, file_name: str, folder: str) -> StoredImage:
        url = f"https://img.test/{file_name}"
        self.files[url] = content
        return StoredImage(url=url, file_id=f"file-{len(self.files)}", name=file_name)

    async def download(self, url: str) -> bytes:
        return self.files.get(url, b"")


class FakePaymentGateway(IPaymentGateway):
    def __init__(self):
        self.sessions: List[Dict] = []

    async def create_checkout_session(
        self, price_id, customer_email, success_url, cancel_url, metadata
    ) -> CheckoutSession:
        self.sessions.append({"price_id": price_id, "metadata": metadata})
        return CheckoutSession(id="cs_test", url="https://checkout.test/cs_test")

    def parse_webhook(self, payload: bytes, signature: str):
        raise NotImplementedError


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest_asyncio.fixture
async def client(db_session, identity, email_sender):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_image_storage] = FakeImageStorage
    app.dependency_overrides[get_payment_gateway] = FakePaymentGateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
