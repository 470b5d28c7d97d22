"""Wrapper de httpx.

Estandariza base URL, timeouts, headers y la autenticación:
- Un hook de request adjunta `Authorization: Bearer <token>` a toda ruta que
  no sea pública.
- Un hook de response borra el token guardado ante un 401.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.interfaces.token_store import TokenStore

logger = logging.getLogger(__name__)

PUBLIC_ROUTES: tuple[str, ...] = ("/auth/login", "/auth/register")


def is_public_route(path: str) -> bool:
    """Las rutas públicas se detectan por contención, no por igualdad exacta."""

    return any(route in path for route in PUBLIC_ROUTES)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    token_store: TokenStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al backend.

    `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)

    async def _attach_token(request: httpx.Request) -> None:
        logger.debug("%s %s", request.method, request.url)
        if token_store is None or is_public_route(request.url.path):
            return
        token = token_store.get()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _clear_on_unauthorized(response: httpx.Response) -> None:
        logger.debug("%s %s -> %s", response.request.method, response.request.url, response.status_code)
        if response.status_code == 401 and token_store is not None:
            token_store.clear()
            logger.warning("Token expired, please login again")

    return httpx.AsyncClient(
        base_url=settings.api_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
        event_hooks={
            "request": [_attach_token],
            "response": [_clear_on_unauthorized],
        },
    )
