from fastapi import Depends, Request
from httpx import AsyncClient
from redis.asyncio import Redis

from auth.application.services import resolve_session
from auth.domain.entities import Session
from auth.infrastructure.gotrue_gateway import GoTrueAuthGateway
from auth.infrastructure.session_store import RedisSessionStore
from shared.config import settings
from shared.exceptions import AuthenticationError
from shared.infrastructure.backend import BackendClient
from shared.infrastructure.http import get_backend_http
from shared.infrastructure.redis import get_redis_pool
from shared.logging import get_logger

logger = get_logger(__name__)


def get_http() -> AsyncClient:
    return get_backend_http()


def get_redis() -> Redis:
    return get_redis_pool()


def get_session_store(redis: Redis = Depends(get_redis)) -> RedisSessionStore:
    return RedisSessionStore(
        redis,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
        flow_ttl_seconds=settings.AUTH_FLOW_TTL_SECONDS,
    )


def get_auth_gateway(http: AsyncClient = Depends(get_http)) -> GoTrueAuthGateway:
    return GoTrueAuthGateway(http, settings.SUPABASE_ANON_KEY)


async def get_optional_session(
    request: Request,
    store: RedisSessionStore = Depends(get_session_store),
    gateway: GoTrueAuthGateway = Depends(get_auth_gateway),
) -> Session | None:
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not session_id:
        return None
    try:
        return await resolve_session(gateway, store, session_id)
    except AuthenticationError as exc:
        logger.debug("Ignoring unusable session cookie: %s", exc.message)
        return None


async def get_current_session(
    session: Session | None = Depends(get_optional_session),
) -> Session:
    if session is None:
        raise AuthenticationError("Not signed in")
    return session


def get_backend(
    session: Session = Depends(get_current_session),
    http: AsyncClient = Depends(get_http),
) -> BackendClient:
    """Backend client acting as the signed-in user."""
    return BackendClient(http, settings.SUPABASE_ANON_KEY, access_token=session.access_token)
