from redis.asyncio import ConnectionPool, Redis

from shared.config import settings

# Holds sessions and sign-in flow verifiers only.
session_pool = ConnectionPool.from_url(
    settings.REDIS_URL,
    socket_timeout=settings.BACKEND_TIMEOUT_SECONDS,
    health_check_interval=30,
)


def get_redis_pool() -> Redis:
    return Redis(connection_pool=session_pool)


async def close_redis_pool() -> None:
    await session_pool.aclose()
