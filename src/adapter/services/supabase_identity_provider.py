"""
Supabase (GoTrue) identity provider.

Tokens are verified locally with the project's JWT secret when one is
configured, otherwise by asking GoTrue for the user behind the token.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt

from src.app.services.errors import IdentityExistsError, InvalidCredentialsError, ProviderError
from src.app.services.identity_provider import IdentityUser, IIdentityProvider

logger = logging.getLogger(__name__)

PROVIDER = "identity"


class SupabaseIdentityProvider(IIdentityProvider):
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_role_key: str,
        jwt_secret: str = "",
        timeout: float = 10.0,
        read_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_role_key = service_role_key
        self.jwt_secret = jwt_secret
        self.timeout = timeout
        self.read_retries = read_retries
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self.base_url}/auth/v1", timeout=self.timeout, transport=self.transport
        )

    def _admin_headers(self) -> Dict[str, str]:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }

    async def _request(
        self, method: str, path: str, idempotent: bool = False, **kwargs: Any
    ) -> httpx.Response:
        """Send a request; only idempotent reads are retried on transport errors and 5xx"""
        attempts = 1 + (self.read_retries if idempotent else 0)
        last_error: Optional[Exception] = None
        async with self._client() as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = await client.request(method, path, **kwargs)
                except httpx.HTTPError as exc:
                    last_error = exc
                    logger.warning(f"Identity provider {method} {path} failed (attempt {attempt}): {exc}")
                    continue
                if response.status_code >= 500:
                    last_error = ProviderError(PROVIDER, f"HTTP {response.status_code}")
                    logger.warning(
                        f"Identity provider {method} {path} returned {response.status_code} (attempt {attempt})"
                    )
                    continue
                return response
        raise ProviderError(PROVIDER, str(last_error))

    @staticmethod
    def _to_identity(payload: Dict[str, Any]) -> IdentityUser:
        user = payload.get("user", payload)
        return IdentityUser(id=UUID(user["id"]), email=user.get("email", ""))

    async def verify_token(self, token: str) -> IdentityUser:
        if self.jwt_secret:
            try:
                claims = jwt.decode(
                    token, self.jwt_secret, algorithms=["HS256"], audience="authenticated"
                )
            except JWTError:
                raise InvalidCredentialsError("Invalid or expired token")
            return IdentityUser(id=UUID(claims["sub"]), email=claims.get("email", ""))

        response = await self._request(
            "GET",
            "/user",
            idempotent=True,
            headers={"apikey": self.anon_key, "Authorization": f"Bearer {token}"},
        )
        if response.status_code in (401, 403):
            raise InvalidCredentialsError("Invalid or expired token")
        if response.status_code != 200:
            raise ProviderError(PROVIDER, f"Unexpected status {response.status_code}")
        return self._to_identity(response.json())

    async def create_user(self, email: str, password: str) -> IdentityUser:
        response = await self._request(
            "POST",
            "/admin/users",
            headers=self._admin_headers(),
            json={"email": email, "password": password, "email_confirm": True},
        )
        if response.status_code in (400, 409, 422) and "already" in response.text.lower():
            raise IdentityExistsError(email)
        if response.status_code not in (200, 201):
            raise ProviderError(PROVIDER, f"Create user failed with {response.status_code}")
        return self._to_identity(response.json())

    async def update_password(self, user_id: UUID, password: str) -> None:
        response = await self._request(
            "PUT",
            f"/admin/users/{user_id}",
            headers=self._admin_headers(),
            json={"password": password},
        )
        if response.status_code != 200:
            raise ProviderError(PROVIDER, f"Password update failed with {response.status_code}")

    async def verify_password(self, email: str, password: str) -> bool:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            headers={"apikey": self.anon_key},
            json={"email": email, "password": password},
        )
        if response.status_code == 200:
            return True
        if response.status_code in (400, 401):
            return False
        raise ProviderError(PROVIDER, f"Sign-in check failed with {response.status_code}")

    async def generate_recovery_link(self, email: str, redirect_to: str) -> Optional[str]:
        response = await self._request(
            "POST",
            "/admin/generate_link",
            headers=self._admin_headers(),
            json={"type": "recovery", "email": email, "redirect_to": redirect_to},
        )
        if response.status_code in (404, 422):
            return None
        if response.status_code != 200:
            raise ProviderError(PROVIDER, f"Recovery link failed with {response.status_code}")
        payload = response.json()
        return payload.get("action_link") or payload.get("properties", {}).get("action_link")
