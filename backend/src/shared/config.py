from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = "dev-anon-key"
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    JWT_SECRET: str = "dev-secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    REDIS_URL: str = "redis://localhost:6379"
    SESSION_COOKIE_NAME: str = "docshare_session"
    AUTH_FLOW_COOKIE_NAME: str = "docshare_auth_flow"
    SESSION_TTL_SECONDS: int = 7 * 24 * 3600
    AUTH_FLOW_TTL_SECONDS: int = 600
    COOKIE_SECURE: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
