from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from auth.application.services import complete_sign_in, send_magic_link, sign_out
from auth.domain.entities import Session
from auth.infrastructure.gotrue_gateway import GoTrueAuthGateway
from auth.infrastructure.session_store import RedisSessionStore
from auth.interfaces.schemas import MagicLinkRequest, StatusResponse, UserResponse
from shared.config import settings
from shared.dependencies import get_auth_gateway, get_current_session, get_session_store
from shared.exceptions import AuthenticationError
from shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])

DOCUMENT_LIST_PATH = "/supabase-test"


@router.post("/api/auth/magic-link", response_model=StatusResponse)
async def magic_link(
    body: MagicLinkRequest,
    request: Request,
    response: Response,
    store: RedisSessionStore = Depends(get_session_store),
    gateway: GoTrueAuthGateway = Depends(get_auth_gateway),
):
    flow_id = await send_magic_link(
        gateway, store, email=body.email, redirect_to=str(request.url_for("auth_callback"))
    )
    response.set_cookie(
        settings.AUTH_FLOW_COOKIE_NAME,
        flow_id,
        max_age=settings.AUTH_FLOW_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return StatusResponse(status="Magic link sent, check your inbox")


@router.get("/auth/callback", name="auth_callback")
async def callback(
    request: Request,
    code: str | None = None,
    store: RedisSessionStore = Depends(get_session_store),
    gateway: GoTrueAuthGateway = Depends(get_auth_gateway),
):
    if not code:
        return RedirectResponse(DOCUMENT_LIST_PATH, status_code=303)

    flow_id = request.cookies.get(settings.AUTH_FLOW_COOKIE_NAME)
    try:
        session_id = await complete_sign_in(gateway, store, flow_id, code)
    except AuthenticationError as exc:
        logger.warning("Sign-in callback failed: %s", exc.message)
        response = RedirectResponse(f"{DOCUMENT_LIST_PATH}?error=sign_in_failed", status_code=303)
        response.delete_cookie(settings.AUTH_FLOW_COOKIE_NAME)
        return response

    response = RedirectResponse(DOCUMENT_LIST_PATH, status_code=303)
    response.delete_cookie(settings.AUTH_FLOW_COOKIE_NAME)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session_id,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return response


@router.post("/api/auth/sign-out", response_model=StatusResponse)
async def sign_out_route(
    request: Request,
    response: Response,
    store: RedisSessionStore = Depends(get_session_store),
    gateway: GoTrueAuthGateway = Depends(get_auth_gateway),
):
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if session_id:
        await sign_out(gateway, store, session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return StatusResponse(status="Signed out")


@router.get("/api/auth/me", response_model=UserResponse)
async def me(session: Session = Depends(get_current_session)):
    return session.user
