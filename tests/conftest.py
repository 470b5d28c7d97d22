"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
isolated_env   — autouse; points config, token file and API URL at tmp paths
settings       — `AppSettings` built from that isolated environment
backend        — in-memory fake of the REST backend (httpx.MockTransport)
token_store    — `MemoryTokenStore` preloaded with a token
api            — `BuildlinkApi` wired to `backend` and `token_store`
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.api_client import BuildlinkApi
from adapters.token_store import MemoryTokenStore
from core.config import AppSettings

API_URL = "http://api.test/api"
TOKEN = "secret-token"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Routes `(METHOD, path-under-/api)` to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, *, status: int = 200) -> None:
        def _respond(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        self.routes[(method.upper(), path)] = _respond

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method.upper(), path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/api"):
            path = path[len("/api"):]
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"error": f"No route for {request.method} {path}"})
        return handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last(self, method: str, path: str) -> httpx.Request:
        for request in reversed(self.requests):
            if request.method == method and request.url.path == "/api" + path:
                return request
        raise AssertionError(f"{method} {path} was never requested")

    def calls(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == "/api" + path)

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch) -> None:
    for key in ("BUILDLINK_LOG_FILE", "BUILDLINK_LOG_LEVEL", "BUILDLINK_CURRENCY_SYMBOL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("BUILDLINK_API_URL", API_URL)
    monkeypatch.setenv("BUILDLINK_TOKEN_PATH", str(tmp_path / "config" / "auth_token"))
    monkeypatch.setenv("BUILDLINK_HTTP_TIMEOUT_SECONDS", "10")
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore(TOKEN)


@pytest.fixture
def api(settings, backend, token_store) -> BuildlinkApi:
    return BuildlinkApi.from_settings(settings, token_store=token_store, transport=backend.transport())


# ── Sample payloads ──────────────────────────────────────────────────────────


@pytest.fixture
def project_payload() -> dict:
    return {
        "id": 7,
        "name": "Tower",
        "description": "Twelve storey residential block",
        "budget": 2500000,
        "status": "in_progress",
        "start_date": "2024-03-05",
        "end_date": "2025-01-31",
        "created_by_name": "asha",
        "civil_engineer_id": 12,
        "civil_engineer_name": "ravi",
        "site_code": "TW-1",
    }


@pytest.fixture
def material_payload() -> dict:
    return {
        "id": 3,
        "name": "Cement",
        "unit": "bag",
        "price_per_unit": 420.5,
        "stock_quantity": 50,
        "category": "binding",
        "description": "OPC 53 grade",
    }


@pytest.fixture
def planning_project(project_payload) -> dict:
    return dict(project_payload, status="planning")
