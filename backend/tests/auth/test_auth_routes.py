from conftest import sign_in
from shared.config import settings


async def test_magic_link_sets_flow_cookie(client, fake):
    resp = await client.post("/api/auth/magic-link", json={"email": "alice@example.com"})
    assert resp.status_code == 200
    assert settings.AUTH_FLOW_COOKIE_NAME in resp.cookies
    assert "alice@example.com" in fake.outbox


async def test_magic_link_rejects_invalid_email(client, fake):
    resp = await client.post("/api/auth/magic-link", json={"email": "not-an-email"})
    assert resp.status_code == 422
    assert fake.requests == []


async def test_callback_signs_in_and_redirects(client, fake):
    await sign_in(client, fake, "alice@example.com")

    resp = await client.get("/api/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == "alice@example.com"


async def test_callback_redirect_target(client, fake):
    await client.post("/api/auth/magic-link", json={"email": "alice@example.com"})
    resp = await client.get("/auth/callback", params={"code": fake.outbox["alice@example.com"]})
    assert resp.status_code == 303
    assert resp.headers["location"] == "/supabase-test"
    assert settings.SESSION_COOKIE_NAME in resp.cookies


async def test_callback_without_code_just_redirects(client, fake):
    resp = await client.get("/auth/callback")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/supabase-test"
    assert fake.requests == []


async def test_callback_with_bad_code(client):
    await client.post("/api/auth/magic-link", json={"email": "alice@example.com"})
    resp = await client.get("/auth/callback", params={"code": "bogus"})
    assert resp.status_code == 303
    assert resp.headers["location"] == "/supabase-test?error=sign_in_failed"

    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401


async def test_sign_out(client, fake):
    await sign_in(client, fake, "alice@example.com")

    resp = await client.post("/api/auth/sign-out")
    assert resp.status_code == 200

    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401


async def test_me_requires_session(client):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["sign_in"] == "/supabase-test"
