import logging

from shared.config import settings

# Configure once; reloads (uvicorn --reload, pytest) must not stack handlers.
if not logging.root.handlers:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

if settings.ENVIRONMENT in ("development", "test"):
    logging.getLogger("docshare").setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the application's ``docshare`` namespace."""
    return logging.getLogger(f"docshare.{name}")


def mask_email(email: str) -> str:
    """Keep the first character and the domain: ``alice@example.com`` -> ``a***@example.com``."""
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"
