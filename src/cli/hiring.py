"""Hiring commands (client side): browse candidates and send requests."""

from __future__ import annotations

from typing import Optional

import typer

from cli.runtime import console, get_settings, run_action
from cli.ui_components import build_candidates_table, build_requests_table
from core.services import workflows

app = typer.Typer(no_args_is_help=True, help="Hire engineers and workers for a project.")


def _show_candidates(project_id: int, *, engineers: bool) -> None:
    label = "engineers" if engineers else "workers"
    candidates = run_action(
        lambda api: workflows.list_candidates(api, project_id, engineers=engineers),
        failure=f"Failed to fetch available {label}",
    )
    console.print(build_candidates_table(candidates, title=f"Available {label} for project #{project_id}"))


@app.command()
def engineers(project_id: int = typer.Argument(..., help="Project ID.")) -> None:
    """Available civil engineers, flagged when already requested for this project."""

    _show_candidates(project_id, engineers=True)


@app.command()
def workers(project_id: int = typer.Argument(..., help="Project ID.")) -> None:
    """Available workers, flagged when already requested for this project."""

    _show_candidates(project_id, engineers=False)


@app.command()
def send(
    project_id: int = typer.Argument(..., help="Project ID."),
    worker_id: int = typer.Argument(..., help="Engineer/worker user ID."),
    message: str = typer.Option(..., "--message", "-m", prompt=True),
) -> None:
    """Send a hiring request."""

    run_action(
        lambda api: workflows.send_hire_request(
            api, project_id=project_id, worker_id=worker_id, message=message
        ),
        failure="Failed to send request",
    )
    console.print("[green]Request sent successfully![/green]")


@app.command()
def sent(
    project_id: Optional[int] = typer.Option(None, "--project", "-p", help="Only this project."),
) -> None:
    """Requests you have sent and their status."""

    requests = run_action(lambda api: api.sent_requests(), failure="Failed to fetch requests")
    if project_id is not None:
        requests = [r for r in requests if r.project_id == project_id]
    console.print(
        build_requests_table(requests, title="Sent requests", currency=get_settings().currency_symbol)
    )
