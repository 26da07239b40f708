"""Thin client for the hosted backend's table and procedure endpoints.

Requests carry the caller's access token, so the backend evaluates its
row-level security policies as that user. Nothing here enforces access
itself.
"""

from typing import Any

import httpx
from httpx import AsyncClient, Response

from shared.exceptions import BackendError
from shared.logging import get_logger

logger = get_logger(__name__)

REST_PREFIX = "/rest/v1"


def error_message(response: Response) -> tuple[str, str | None]:
    """Extract (message, code) from a PostgREST or GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", None
    if not isinstance(body, dict):
        return str(body), None
    message = (
        body.get("message")
        or body.get("msg")
        or body.get("error_description")
        or body.get("error")
        or f"HTTP {response.status_code}"
    )
    code = body.get("code") or body.get("error_code")
    return str(message), str(code) if code is not None else None


def raise_for_backend_error(response: Response) -> None:
    if response.is_success:
        return
    message, code = error_message(response)
    logger.warning(
        "Backend %s %s failed: status=%s code=%s message=%s",
        response.request.method,
        response.request.url.path,
        response.status_code,
        code,
        message,
    )
    raise BackendError(message, code=code)


async def send(http: AsyncClient, method: str, url: str, **kwargs: Any) -> Response:
    """Issue a request, turning transport failures and error statuses into BackendError."""
    try:
        response = await http.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("Backend %s %s unreachable: %r", method, url, exc)
        raise BackendError(f"Backend unreachable: {exc}") from exc
    raise_for_backend_error(response)
    return response


class BackendClient:
    def __init__(self, http: AsyncClient, api_key: str, access_token: str | None = None):
        self.http = http
        self.api_key = api_key
        self.access_token = access_token

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
        }
        headers.update(extra)
        return headers

    async def select(
        self,
        table: str,
        columns: str,
        *,
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        ascending: bool = True,
    ) -> list[dict[str, Any]]:
        params = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"

        response = await send(
            self.http, "GET", f"{REST_PREFIX}/{table}", params=params, headers=self._headers()
        )
        return response.json()

    async def select_one(
        self, table: str, columns: str, *, filters: dict[str, Any]
    ) -> dict[str, Any] | None:
        rows = await self.select(table, columns, filters=filters)
        return rows[0] if rows else None

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        response = await send(
            self.http,
            "POST",
            f"{REST_PREFIX}/{table}",
            json=row,
            headers=self._headers(Prefer="return=representation"),
        )
        return response.json()[0]

    async def delete(self, table: str, *, filters: dict[str, Any]) -> None:
        params = {column: f"eq.{value}" for column, value in filters.items()}
        await send(
            self.http, "DELETE", f"{REST_PREFIX}/{table}", params=params, headers=self._headers()
        )

    async def rpc(self, name: str, params: dict[str, Any]) -> Any:
        response = await send(
            self.http, "POST", f"{REST_PREFIX}/rpc/{name}", json=params, headers=self._headers()
        )
        return response.json()
