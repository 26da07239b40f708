import httpx
import pytest

from auth.application.services import (
    TokenExpiredError,
    complete_sign_in,
    resolve_session,
    send_magic_link,
    sign_out,
    verify_token,
)
from auth.infrastructure.gotrue_gateway import GoTrueAuthGateway
from shared.config import settings
from shared.exceptions import AuthenticationError, BackendError

REDIRECT = "http://test/auth/callback"


@pytest.fixture
def gateway(http):
    return GoTrueAuthGateway(http, settings.SUPABASE_ANON_KEY)


async def _signed_in(gateway, store, fake, email="alice@example.com") -> str:
    flow_id = await send_magic_link(gateway, store, email=email, redirect_to=REDIRECT)
    return await complete_sign_in(gateway, store, flow_id, fake.outbox[email])


async def test_send_magic_link(gateway, store, fake):
    flow_id = await send_magic_link(
        gateway, store, email="alice@example.com", redirect_to=REDIRECT
    )
    assert flow_id
    assert "alice@example.com" in fake.outbox

    otp_request = fake.requests[-1]
    assert otp_request.url.path == "/auth/v1/otp"
    assert otp_request.url.params["redirect_to"] == REDIRECT


async def test_complete_sign_in_stores_session(gateway, store, fake):
    session_id = await _signed_in(gateway, store, fake)

    session = await store.get(session_id)
    assert session is not None
    assert session.user.email == "alice@example.com"
    assert str(session.user.id) == fake.create_user("alice@example.com")["id"]


async def test_complete_sign_in_without_flow(gateway, store, fake):
    await send_magic_link(gateway, store, email="alice@example.com", redirect_to=REDIRECT)
    with pytest.raises(AuthenticationError, match="expired or opened in another browser"):
        await complete_sign_in(gateway, store, None, fake.outbox["alice@example.com"])


async def test_flow_is_single_use(gateway, store, fake):
    flow_id = await send_magic_link(
        gateway, store, email="alice@example.com", redirect_to=REDIRECT
    )
    code = fake.outbox["alice@example.com"]
    await complete_sign_in(gateway, store, flow_id, code)

    with pytest.raises(AuthenticationError):
        await complete_sign_in(gateway, store, flow_id, code)


async def test_complete_sign_in_bad_code(gateway, store):
    flow_id = await send_magic_link(
        gateway, store, email="alice@example.com", redirect_to=REDIRECT
    )
    with pytest.raises(AuthenticationError, match="invalid flow state"):
        await complete_sign_in(gateway, store, flow_id, "not-a-real-code")


def test_verify_valid_token(fake):
    user = fake.create_user("alice@example.com")
    token = fake.issue_session(user)["access_token"]

    verified = verify_token(token)
    assert str(verified.id) == user["id"]
    assert verified.email == "alice@example.com"


def test_verify_invalid_token():
    with pytest.raises(AuthenticationError, match="Invalid or expired token"):
        verify_token("garbage.token.here")


def test_verify_expired_token(fake):
    fake.access_ttl = -60
    token = fake.issue_session(fake.create_user("alice@example.com"))["access_token"]
    with pytest.raises(TokenExpiredError):
        verify_token(token)


async def test_resolve_session(gateway, store, fake):
    session_id = await _signed_in(gateway, store, fake)
    session = await resolve_session(gateway, store, session_id)
    assert session.user.email == "alice@example.com"


async def test_resolve_unknown_session(gateway, store):
    with pytest.raises(AuthenticationError, match="Not signed in"):
        await resolve_session(gateway, store, "missing")


async def test_resolve_session_refreshes_expired_token(gateway, store, fake):
    fake.access_ttl = -60
    session_id = await _signed_in(gateway, store, fake)
    stale = await store.get(session_id)

    fake.access_ttl = 3600
    session = await resolve_session(gateway, store, session_id)

    assert session.access_token != stale.access_token
    assert session.refresh_token != stale.refresh_token
    assert (await store.get(session_id)).access_token == session.access_token


async def test_resolve_session_with_revoked_refresh_token(gateway, store, fake):
    fake.access_ttl = -60
    session_id = await _signed_in(gateway, store, fake)
    stale = await store.get(session_id)
    await gateway.refresh(stale.refresh_token)  # consumes the stored refresh token

    with pytest.raises(AuthenticationError, match="Session expired"):
        await resolve_session(gateway, store, session_id)
    assert await store.get(session_id) is None


async def test_sign_out_invalidates_session(gateway, store, fake):
    session_id = await _signed_in(gateway, store, fake)

    await sign_out(gateway, store, session_id)

    assert await store.get(session_id) is None
    assert fake.requests[-1].url.path == "/auth/v1/logout"
    with pytest.raises(AuthenticationError):
        await resolve_session(gateway, store, session_id)


async def test_send_magic_link_backend_unreachable(gateway, store, fake):
    fake.break_next("POST", "/auth/v1/otp", httpx.ConnectTimeout("timed out"))
    with pytest.raises(BackendError, match="timed out"):
        await send_magic_link(gateway, store, email="alice@example.com", redirect_to=REDIRECT)


async def test_complete_sign_in_backend_unreachable(gateway, store, fake):
    flow_id = await send_magic_link(
        gateway, store, email="alice@example.com", redirect_to=REDIRECT
    )
    fake.break_next("POST", "/auth/v1/token", httpx.ConnectError("connection refused"))

    with pytest.raises(AuthenticationError):
        await complete_sign_in(gateway, store, flow_id, fake.outbox["alice@example.com"])


async def test_resolve_session_drops_session_when_refreshed_token_is_invalid(
    gateway, store, fake
):
    fake.access_ttl = -60
    session_id = await _signed_in(gateway, store, fake)
    user = fake.create_user("alice@example.com")
    fake.fail_next(
        "POST",
        "/auth/v1/token",
        200,
        {
            "access_token": "not-a-jwt",
            "refresh_token": "rotated",
            "expires_at": 0,
            "user": user,
        },
    )

    with pytest.raises(AuthenticationError):
        await resolve_session(gateway, store, session_id)
    assert await store.get(session_id) is None
