"""Worker-side request inbox."""

from __future__ import annotations

from typing import Optional

import typer

from cli.runtime import console, get_settings, run_action
from cli.ui_components import build_requests_table
from core.domain.models import RequestStatus
from core.services import workflows
from core.services.project_views import pending_count

app = typer.Typer(no_args_is_help=True, help="Hiring requests received by a worker.")


@app.command("list")
def list_requests(
    status: Optional[RequestStatus] = typer.Option(None, "--status", "-s", case_sensitive=False),
) -> None:
    requests = run_action(lambda api: api.received_requests(), failure="Failed to fetch requests")
    pending = pending_count(requests)
    if status is not None:
        requests = [r for r in requests if r.status == status.value]
    console.print(
        build_requests_table(requests, title="Received requests", currency=get_settings().currency_symbol)
    )
    console.print(f"{pending} pending requests", style="dim")


def _respond(request_id: int, status: RequestStatus) -> None:
    run_action(
        lambda api: workflows.respond_to_request(api, request_id, status.value),
        failure="Failed to respond to request",
    )
    console.print(f"[green]Request {status.value} successfully![/green]")


@app.command()
def accept(request_id: int = typer.Argument(..., help="Request ID.")) -> None:
    _respond(request_id, RequestStatus.ACCEPTED)


@app.command()
def reject(request_id: int = typer.Argument(..., help="Request ID.")) -> None:
    _respond(request_id, RequestStatus.REJECTED)
