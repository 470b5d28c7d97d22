"""Project commands (clients create/edit, workers browse)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cli.runtime import confirm_or_abort, console, get_settings, maybe_export, run_action
from cli.ui_components import build_project_panel, build_projects_table
from core.domain.forms import ProjectForm, build_form
from core.domain.models import ProjectStatus
from core.services import workflows
from core.services.project_views import ALL_STATUSES, filter_projects

app = typer.Typer(no_args_is_help=True, help="List, create, update and delete projects.")


@app.command("list")
def list_projects(
    status: Optional[ProjectStatus] = typer.Option(None, "--status", "-s", case_sensitive=False, help="Only this status."),
    worker: bool = typer.Option(False, "--worker", help="Show your role on each project."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also save the list as JSON."),
) -> None:
    """List the projects visible to the signed-in account."""

    projects = run_action(lambda api: api.list_projects(), failure="Failed to fetch projects")
    projects = filter_projects(projects, status.value if status else ALL_STATUSES)
    console.print(build_projects_table(projects, currency=get_settings().currency_symbol, show_role=worker))
    maybe_export(projects, output)


@app.command()
def show(project_id: int = typer.Argument(..., help="Project ID.")) -> None:
    """Show a project's details."""

    project = run_action(lambda api: workflows.find_project(api, project_id), failure="Failed to fetch projects")
    console.print(build_project_panel(project, currency=get_settings().currency_symbol))


@app.command()
def create(
    name: str = typer.Option("", "--name", "-n"),
    budget: str = typer.Option("", "--budget", "-b"),
    description: str = typer.Option("", "--description", "-d"),
    start_date: str = typer.Option("", "--start", help="YYYY-MM-DD"),
    end_date: str = typer.Option("", "--end", help="YYYY-MM-DD"),
    plan_image: Optional[Path] = typer.Option(None, "--image", help="Plan image to upload."),
) -> None:
    """Create a project (name and budget are required)."""

    async def _action(api):
        form = build_form(
            ProjectForm,
            name=name,
            budget=budget,
            description=description,
            start_date=start_date,
            end_date=end_date,
            plan_image=plan_image,
        )
        return await api.create_project(form)

    project = run_action(_action, failure="Failed to create project")
    console.print(f"[green]Project created successfully[/green] (#{project.id} {project.name})")


@app.command()
def update(
    project_id: int = typer.Argument(..., help="Project ID."),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
    budget: Optional[str] = typer.Option(None, "--budget", "-b"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    start_date: Optional[str] = typer.Option(None, "--start", help="YYYY-MM-DD"),
    end_date: Optional[str] = typer.Option(None, "--end", help="YYYY-MM-DD"),
    status: Optional[ProjectStatus] = typer.Option(None, "--status", "-s", case_sensitive=False),
    plan_image: Optional[Path] = typer.Option(None, "--image", help="Replace the plan image."),
) -> None:
    """Update a project; omitted options keep their current value."""

    project = run_action(
        lambda api: workflows.update_project(
            api,
            project_id,
            name=name,
            budget=budget,
            description=description,
            start_date=start_date,
            end_date=end_date,
            status=status.value if status else None,
            plan_image=plan_image,
        ),
        failure="Failed to update project",
    )
    console.print(f"[green]Project updated successfully[/green] (#{project.id} {project.name})")


@app.command()
def delete(
    project_id: int = typer.Argument(..., help="Project ID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete a project."""

    confirm_or_abort("Are you sure you want to delete this project?", yes=yes)
    run_action(lambda api: api.delete_project(project_id), failure="Failed to delete project")
    console.print("[green]Project deleted successfully[/green]")
