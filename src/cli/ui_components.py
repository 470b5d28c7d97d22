"""Componentes de UI para CLI (Rich).

Tablas y paneles reutilizados por los comandos. Ninguna función imprime salvo
`print_banner`: devuelven renderables y el comando decide dónde mostrarlos.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Material, Milestone, Project, User, WorkerRequest
from core.services.project_views import (
    HiringCandidate,
    format_date,
    format_money,
    milestone_status_label,
    project_role,
    project_status_label,
    request_status_label,
)

_PROJECT_STATUS_STYLES = {
    "planning": "yellow",
    "in_progress": "blue",
    "completed": "green",
    "cancelled": "red",
}

_MILESTONE_STATUS_STYLES = {
    "pending": "yellow",
    "in_progress": "blue",
    "completed": "green",
}

_REQUEST_STATUS_STYLES = {
    "pending": "yellow",
    "accepted": "green",
    "rejected": "red",
}


def print_banner(console: Console) -> None:
    title = Text("BuildLink", style="bold cyan")
    subtitle = Text("Projects • Materials • Milestones • Hiring", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_alert_panel(title: str, message: str, *, style: str = "red") -> Panel:
    """Equivalente en terminal de un diálogo de alerta."""

    return Panel(Text(message), title=Text(title, style=f"bold {style}"), border_style=style)


def _styled(label: str, raw: str | None, styles: Mapping[str, str]) -> Text:
    return Text(label, style=styles.get(raw or "", "white"))


def build_projects_table(
    projects: Sequence[Project],
    *,
    currency: str = "₹",
    show_role: bool = False,
) -> Table:
    table = Table(title=f"Projects ({len(projects)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Status")
    table.add_column("Budget", justify="right")
    table.add_column("Dates", style="dim")
    table.add_column("Client")
    table.add_column("Engineer")
    if show_role:
        table.add_column("Role", style="magenta")

    for project in projects:
        row = [
            str(project.id),
            project.name or "-",
            _styled(project_status_label(project.status), project.status, _PROJECT_STATUS_STYLES),
            format_money(project.budget, currency),
            f"{format_date(project.start_date)} - {format_date(project.end_date)}",
            project.created_by_name or "-",
            project.civil_engineer_name or "-",
        ]
        if show_role:
            row.append(project_role(project))
        table.add_row(*row)
    return table


def build_project_panel(project: Project, *, currency: str = "₹") -> Panel:
    body = Text()
    body.append(f"{project.description or 'No description provided'}\n\n")
    body.append("Status: ", style="bold")
    body.append(project_status_label(project.status) + "\n")
    body.append("Budget: ", style="bold")
    body.append(format_money(project.budget, currency) + "\n")
    body.append("Start: ", style="bold")
    body.append(format_date(project.start_date) + "\n")
    body.append("End: ", style="bold")
    body.append(format_date(project.end_date) + "\n")
    body.append("Client: ", style="bold")
    body.append((project.created_by_name or "-") + "\n")
    body.append("Engineer: ", style="bold")
    body.append((project.civil_engineer_name or "Not assigned") + "\n")
    body.append("Role: ", style="bold")
    body.append(project_role(project) + "\n")
    if project.plan_image_url:
        body.append("Plan: ", style="bold")
        body.append(project.plan_image_url + "\n")
    body.append(f"\nCreated {format_date(project.created_at)} · Updated {format_date(project.updated_at)}", style="dim")
    title = Text(f"#{project.id} {project.name or ''}".rstrip(), style="bold cyan")
    return Panel(body, title=title, border_style="cyan")


def build_materials_table(
    materials: Sequence[Material],
    *,
    currency: str = "₹",
    ordered: Mapping[int | None, int] | None = None,
) -> Table:
    table = Table(title=f"Materials ({len(materials)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Unit")
    table.add_column("Price/unit", justify="right")
    table.add_column("Stock", justify="right")
    if ordered is not None:
        table.add_column("Ordered", justify="right", style="green")

    for material in materials:
        stock = material.stock_quantity
        row = [
            str(material.id),
            material.name or "-",
            material.category or "-",
            material.unit or "-",
            format_money(material.price_per_unit, currency),
            Text(str(stock if stock is not None else "-"), style="red" if stock == 0 else ""),
        ]
        if ordered is not None:
            row.append(str(ordered.get(material.id, 0)))
        table.add_row(*row)
    return table


def build_milestones_table(milestones: Sequence[Milestone]) -> Table:
    table = Table(title=f"Milestones ({len(milestones)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Status")
    table.add_column("Target", style="dim")
    table.add_column("Completed", style="dim")
    table.add_column("Description")

    for milestone in milestones:
        completed = format_date(milestone.completion_date) if milestone.completion_date else "-"
        table.add_row(
            str(milestone.id),
            milestone.title or "-",
            _styled(milestone_status_label(milestone.status), milestone.status, _MILESTONE_STATUS_STYLES),
            format_date(milestone.target_date),
            completed,
            milestone.description or "",
        )
    return table


def build_requests_table(
    requests: Sequence[WorkerRequest],
    *,
    title: str = "Requests",
    currency: str = "₹",
) -> Table:
    table = Table(title=f"{title} ({len(requests)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Project", style="bold")
    table.add_column("From")
    table.add_column("Budget", justify="right")
    table.add_column("Status")
    table.add_column("Sent", style="dim")
    table.add_column("Message")

    for request in requests:
        table.add_row(
            str(request.id),
            request.project_name or str(request.project_id or "-"),
            request.requested_by_name or "-",
            format_money(request.budget, currency),
            _styled(request_status_label(request.status), request.status, _REQUEST_STATUS_STYLES),
            format_date(request.created_at),
            request.message or "",
        )
    return table


def build_candidates_table(candidates: Sequence[HiringCandidate], *, title: str) -> Table:
    table = Table(title=f"{title} ({len(candidates)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Username", style="bold")
    table.add_column("Email")
    table.add_column("Trade")
    table.add_column("Request")

    for candidate in candidates:
        user = candidate.user
        table.add_row(
            str(user.id),
            user.username or "-",
            user.email or "-",
            (user.sub_user_type or "-").replace("_", " "),
            Text("Request Sent", style="dim") if candidate.request_sent else Text("Available", style="green"),
        )
    return table


def build_user_panel(user: User) -> Panel:
    body = Text()
    body.append("Email: ", style="bold")
    body.append((user.email or "-") + "\n")
    body.append("Type: ", style="bold")
    body.append((user.user_type or "-") + "\n")
    if user.sub_user_type:
        body.append("Trade: ", style="bold")
        body.append(user.sub_user_type.replace("_", " ") + "\n")
    if user.is_available is not None:
        body.append("Available: ", style="bold")
        body.append(("yes" if user.is_available else "no") + "\n")
    body.append(f"Member since {format_date(user.created_at)}", style="dim")
    return Panel(body, title=Text(f"#{user.id} {user.username or '-'}", style="bold cyan"), border_style="cyan")
