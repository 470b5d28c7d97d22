"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli import runtime
from core.config import AppSettings, get_user_config_dir, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer counts as reachable; only transport failures are FAIL."""

    try:
        async with build_async_client(settings, transport=runtime.get_transport()) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics."""

    settings = runtime.get_settings()
    store = runtime.get_token_store(settings)

    table = Table(title="BuildLink Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API URL", "OK", settings.api_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Config dir", "OK", str(get_user_config_dir()))

    if store.get():
        table.add_row("Session", "OK", "Token stored")
    else:
        table.add_row("Session", "MISSING", "Run `buildlink login`")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)
    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] set BUILDLINK_API_URL or run `buildlink doctor setup`."
        )
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = runtime.get_settings()
    api_url = typer.prompt("API base URL", default=current.api_url, show_default=True).strip()
    timeout = typer.prompt(
        "Request timeout (seconds)", default=current.http_timeout_seconds, type=float, show_default=True
    )

    if not api_url.startswith(("http://", "https://")):
        raise typer.BadParameter("API URL must start with http:// or https://")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be positive")

    env_path = write_user_env_vars(
        {
            "BUILDLINK_API_URL": api_url,
            "BUILDLINK_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")
