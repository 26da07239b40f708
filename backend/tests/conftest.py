import pytest
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

from auth.infrastructure.session_store import RedisSessionStore
from fake_backend import FakeBackend
from main import app
from shared.config import settings
from shared.dependencies import get_http, get_session_store
from shared.infrastructure.backend import BackendClient


@pytest.fixture
def fake() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def http(fake):
    async with AsyncClient(transport=fake.transport(), base_url=settings.SUPABASE_URL) as client:
        yield client


@pytest.fixture
async def redis():
    r = FakeRedis(server=FakeServer())
    yield r
    await r.aclose()


@pytest.fixture
def store(redis) -> RedisSessionStore:
    return RedisSessionStore(
        redis,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
        flow_ttl_seconds=settings.AUTH_FLOW_TTL_SECONDS,
    )


@pytest.fixture
def override_dependencies(http, store):
    app.dependency_overrides[get_http] = lambda: http
    app.dependency_overrides[get_session_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_dependencies):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def other_client(override_dependencies):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def sign_in(client: AsyncClient, fake: FakeBackend, email: str) -> dict:
    """Walk the magic-link flow through the app and return the backend user."""
    resp = await client.post("/api/auth/magic-link", json={"email": email})
    assert resp.status_code == 200
    resp = await client.get("/auth/callback", params={"code": fake.outbox[email]})
    assert resp.status_code == 303
    return fake.create_user(email)


def backend_as(http: AsyncClient, fake: FakeBackend, user: dict) -> BackendClient:
    session = fake.issue_session(user)
    return BackendClient(http, settings.SUPABASE_ANON_KEY, access_token=session["access_token"])
