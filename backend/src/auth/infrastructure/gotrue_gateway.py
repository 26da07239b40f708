from typing import Any
from uuid import UUID

from httpx import AsyncClient

from auth.domain.entities import Session, User
from shared.infrastructure.backend import send

AUTH_PREFIX = "/auth/v1"


class GoTrueAuthGateway:
    """Passwordless auth against the hosted backend's GoTrue endpoints."""

    def __init__(self, http: AsyncClient, api_key: str):
        self.http = http
        self.api_key = api_key

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
        }

    async def send_magic_link(self, email: str, redirect_to: str, code_challenge: str) -> None:
        await send(
            self.http,
            "POST",
            f"{AUTH_PREFIX}/otp",
            params={"redirect_to": redirect_to},
            json={
                "email": email,
                "create_user": True,
                "code_challenge": code_challenge,
                "code_challenge_method": "s256",
            },
            headers=self._headers(),
        )

    async def exchange_code(self, code: str, code_verifier: str) -> Session:
        response = await send(
            self.http,
            "POST",
            f"{AUTH_PREFIX}/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier},
            headers=self._headers(),
        )
        return _to_session(response.json())

    async def refresh(self, refresh_token: str) -> Session:
        response = await send(
            self.http,
            "POST",
            f"{AUTH_PREFIX}/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
            headers=self._headers(),
        )
        return _to_session(response.json())

    async def sign_out(self, access_token: str) -> None:
        await send(
            self.http, "POST", f"{AUTH_PREFIX}/logout", headers=self._headers(access_token)
        )


def _to_session(body: dict[str, Any]) -> Session:
    return Session(
        access_token=body["access_token"],
        refresh_token=body["refresh_token"],
        expires_at=int(body["expires_at"]),
        user=User(id=UUID(body["user"]["id"]), email=body["user"]["email"]),
    )
