from httpx import AsyncClient, Timeout

from shared.config import settings

_client: AsyncClient | None = None


def get_backend_http() -> AsyncClient:
    """Process-wide connection pool to the hosted backend."""
    global _client
    if _client is None:
        _client = AsyncClient(
            base_url=settings.SUPABASE_URL,
            timeout=Timeout(settings.BACKEND_TIMEOUT_SECONDS),
        )
    return _client


async def close_backend_http() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
