import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth.interfaces.routes import router as auth_router
from documents.interfaces.routes import router as documents_router
from shared.config import settings
from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    BackendError,
    NotFoundError,
    ValidationError,
)
from shared.infrastructure.http import close_backend_http
from shared.infrastructure.redis import close_redis_pool
from shared.logging import get_logger
from sharing.interfaces.routes import router as sharing_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting docshare in %s mode", settings.ENVIRONMENT)
    yield
    await close_backend_http()
    await close_redis_pool()


app = FastAPI(
    title="docshare",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    request.state.request_id = request_id

    logger.info("RID:%s %s %s", request_id, request.method, request.url.path)
    try:
        response: Response = await call_next(request)
    except Exception:
        logger.error(
            "RID:%s Error during request %s", request_id, request.url.path, exc_info=True
        )
        raise
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "RID:%s %s %s -> %s",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ValidationError)
async def validation_handler(request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def auth_error_handler(request, exc: AuthenticationError):
    return JSONResponse(
        status_code=401, content={"detail": exc.message, "sign_in": "/supabase-test"}
    )


@app.exception_handler(AuthorizationError)
async def forbidden_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    request_id = getattr(request.state, "request_id", "N/A")
    logger.warning("RID:%s Backend error on %s: %s", request_id, request.url.path, exc.message)
    return JSONResponse(status_code=502, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(sharing_router)


@app.get("/")
async def landing():
    return {
        "message": f"Welcome to {app.title}",
        "time": datetime.now(timezone.utc).isoformat(),
        "health": "/api/health",
        "documents": "/supabase-test",
    }


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "version": app.version}
