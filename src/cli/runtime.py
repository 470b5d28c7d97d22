"""Shared plumbing for CLI commands.

`run_action` runs one coroutine against a fresh API client and turns the
error families from `core.errors` into alert panels plus exit codes:
2 for validation failures, 1 for everything else.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

import httpx
import typer
from pydantic import BaseModel
from rich.console import Console

from adapters.api_client import BuildlinkApi
from adapters.json_exporter import export_json
from adapters.token_store import FileTokenStore
from cli.ui_components import build_alert_panel
from core.config import AppSettings
from core.errors import (
    NETWORK_ERROR_MESSAGE,
    ApiError,
    AuthenticationError,
    FormValidationError,
    NetworkError,
)
from core.interfaces.token_store import TokenStore

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def get_settings() -> AppSettings:
    return AppSettings()


def get_token_store(settings: AppSettings | None = None) -> TokenStore:
    return FileTokenStore.from_settings(settings or get_settings())


def get_transport() -> httpx.AsyncBaseTransport | None:
    """Transport override hook (tests install an `httpx.MockTransport`)."""

    return None


def open_api(settings: AppSettings | None = None) -> BuildlinkApi:
    settings = settings or get_settings()
    return BuildlinkApi.from_settings(
        settings,
        token_store=get_token_store(settings),
        transport=get_transport(),
    )


def show_alert(title: str, message: str, *, style: str = "red") -> None:
    err_console.print(build_alert_panel(title, message, style=style))


def run_action(
    action: Callable[[BuildlinkApi], Awaitable[T]],
    *,
    failure: str,
    title: str = "Error",
) -> T:
    """Run `action` with an open client; `failure` is shown when the server gives no message."""

    async def _run() -> T:
        async with open_api() as api:
            return await action(api)

    try:
        return asyncio.run(_run())
    except FormValidationError as exc:
        show_alert("Validation", exc.message or str(exc), style="yellow")
        raise typer.Exit(code=2) from exc
    except AuthenticationError as exc:
        show_alert(title, exc.message or "Token expired, please login again")
        raise typer.Exit(code=1) from exc
    except ApiError as exc:
        show_alert(title, exc.message or failure)
        raise typer.Exit(code=1) from exc
    except NetworkError as exc:
        show_alert(title, NETWORK_ERROR_MESSAGE)
        raise typer.Exit(code=1) from exc


def confirm_or_abort(question: str, *, yes: bool) -> None:
    if not yes:
        typer.confirm(question, abort=True)


def maybe_export(entities: Sequence[BaseModel], output: Optional[Path]) -> None:
    if output is None:
        return
    path = export_json(entities=entities, output_path=output)
    console.print(f"[green]Saved JSON to:[/green] {path}")
