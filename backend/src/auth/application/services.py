import base64
import hashlib
import secrets
from uuid import UUID

import jwt

from auth.domain.entities import Session, User
from auth.domain.repository import AuthGateway, SessionStore
from shared.config import settings
from shared.exceptions import AuthenticationError, BackendError
from shared.logging import get_logger, mask_email

logger = get_logger(__name__)


async def send_magic_link(
    gateway: AuthGateway, store: SessionStore, email: str, redirect_to: str
) -> str:
    """Request a sign-in email and return the flow id the browser must keep."""
    verifier, challenge = _pkce_pair()
    await gateway.send_magic_link(email, redirect_to, challenge)
    flow_id = await store.save_flow(verifier)
    logger.info("Magic link requested for %s", mask_email(email))
    return flow_id


async def complete_sign_in(
    gateway: AuthGateway, store: SessionStore, flow_id: str | None, code: str
) -> str:
    """Exchange the one-time code from the magic link for a stored session."""
    verifier = await store.pop_flow(flow_id) if flow_id else None
    if not verifier:
        raise AuthenticationError("Sign-in link expired or opened in another browser")

    try:
        session = await gateway.exchange_code(code, verifier)
    except BackendError as exc:
        raise AuthenticationError(exc.message) from exc

    session_id = await store.create(session)
    logger.info("User %s signed in", session.user.id)
    return session_id


class TokenExpiredError(AuthenticationError):
    def __init__(self):
        super().__init__("Access token expired")


def verify_token(token: str) -> User:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired token")

    return User(id=UUID(payload["sub"]), email=payload.get("email", ""))


async def resolve_session(
    gateway: AuthGateway, store: SessionStore, session_id: str
) -> Session:
    session = await store.get(session_id)
    if not session:
        raise AuthenticationError("Not signed in")

    try:
        verify_token(session.access_token)
        return session
    except TokenExpiredError:
        pass

    try:
        refreshed = await gateway.refresh(session.refresh_token)
    except BackendError as exc:
        await store.delete(session_id)
        raise AuthenticationError("Session expired") from exc

    try:
        verify_token(refreshed.access_token)
    except AuthenticationError:
        await store.delete(session_id)
        raise
    await store.update(session_id, refreshed)
    logger.debug("Refreshed session for user %s", refreshed.user.id)
    return refreshed


async def sign_out(gateway: AuthGateway, store: SessionStore, session_id: str) -> None:
    session = await store.get(session_id)
    await store.delete(session_id)
    if not session:
        return

    try:
        await gateway.sign_out(session.access_token)
    except BackendError as exc:
        logger.warning("Backend sign-out failed for %s: %s", session.user.id, exc.message)
    logger.info("User %s signed out", session.user.id)


def _pkce_pair() -> tuple[str, str]:
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode()).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode()
    return verifier, challenge
