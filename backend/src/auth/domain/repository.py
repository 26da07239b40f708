from typing import Protocol

from auth.domain.entities import Session


class AuthGateway(Protocol):
    async def send_magic_link(self, email: str, redirect_to: str, code_challenge: str) -> None: ...

    async def exchange_code(self, code: str, code_verifier: str) -> Session: ...

    async def refresh(self, refresh_token: str) -> Session: ...

    async def sign_out(self, access_token: str) -> None: ...


class SessionStore(Protocol):
    async def create(self, session: Session) -> str: ...

    async def get(self, session_id: str) -> Session | None: ...

    async def update(self, session_id: str, session: Session) -> None: ...

    async def delete(self, session_id: str) -> None: ...

    async def save_flow(self, code_verifier: str) -> str: ...

    async def pop_flow(self, flow_id: str) -> str | None: ...
