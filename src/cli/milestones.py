"""Milestone commands."""

from __future__ import annotations

from typing import Optional

import typer

from cli.runtime import confirm_or_abort, console, run_action
from cli.ui_components import build_milestones_table
from core.domain.forms import MilestoneForm, build_form
from core.services import workflows

app = typer.Typer(no_args_is_help=True, help="Project milestones.")


@app.command("list")
def list_milestones(project_id: int = typer.Argument(..., help="Project ID.")) -> None:
    milestones = run_action(
        lambda api: api.project_milestones(project_id), failure="Failed to fetch milestones"
    )
    console.print(build_milestones_table(milestones))


@app.command()
def add(
    project_id: int = typer.Argument(..., help="Project ID."),
    title: str = typer.Option("", "--title", "-t"),
    description: str = typer.Option("", "--description", "-d"),
    target_date: str = typer.Option("", "--target", help="YYYY-MM-DD"),
) -> None:
    """Add a milestone to a project."""

    async def _action(api):
        form = build_form(
            MilestoneForm,
            project_id=project_id,
            title=title,
            description=description,
            target_date=target_date,
        )
        return await api.create_milestone(form)

    run_action(_action, failure="Failed to save milestone")
    console.print("[green]Milestone saved[/green]")


@app.command()
def update(
    milestone_id: int = typer.Argument(..., help="Milestone ID."),
    project_id: int = typer.Option(..., "--project", "-p", help="Project the milestone belongs to."),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    target_date: Optional[str] = typer.Option(None, "--target", help="YYYY-MM-DD"),
) -> None:
    """Edit a milestone; its status is kept."""

    run_action(
        lambda api: workflows.update_milestone(
            api,
            project_id=project_id,
            milestone_id=milestone_id,
            title=title,
            description=description,
            target_date=target_date,
        ),
        failure="Failed to save milestone",
    )
    console.print("[green]Milestone saved[/green]")


@app.command()
def delete(
    milestone_id: int = typer.Argument(..., help="Milestone ID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    confirm_or_abort("Are you sure you want to delete this milestone?", yes=yes)
    run_action(lambda api: api.delete_milestone(milestone_id), failure="Failed to delete milestone")
    console.print("[green]Milestone deleted[/green]")


@app.command()
def complete(
    milestone_id: int = typer.Argument(..., help="Milestone ID."),
    project_id: Optional[int] = typer.Option(
        None, "--project", "-p", help="Check the current status first."
    ),
) -> None:
    """Mark a milestone as completed."""

    run_action(
        lambda api: workflows.complete_milestone(api, milestone_id, project_id=project_id),
        failure="Failed to complete milestone",
    )
    console.print("[green]Milestone completed[/green]")
