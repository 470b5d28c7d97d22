"""Presentation helpers shared by every entry-point.

Pure functions over the domain models: status labels, filters, role and
quantity lookups, hiring flags. Keeping them out of the CLI makes them
trivially testable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from core.domain.models import (
    Milestone,
    MilestoneStatus,
    Project,
    ProjectMaterial,
    ProjectStatus,
    RequestStatus,
    User,
    UserType,
    WorkerRequest,
)

ALL_STATUSES = "all"
NOT_SET = "Not set"


def project_status_label(status: str | None) -> str:
    try:
        return ProjectStatus(status).label()
    except ValueError:
        return status or ""


def milestone_status_label(status: str | None) -> str:
    return (status or "").replace("_", " ", 1)


def request_status_label(status: str | None) -> str:
    try:
        return RequestStatus(status).label()
    except ValueError:
        return status or ""


def filter_projects(projects: Sequence[Project], status: str = ALL_STATUSES) -> list[Project]:
    if status == ALL_STATUSES:
        return list(projects)
    return [project for project in projects if project.status == status]


def project_role(project: Project) -> str:
    """Role of the signed-in worker on `project`."""

    if project.civil_engineer_id and project.civil_engineer_name:
        return "Civil Engineer"
    return "Team Member"


def ordered_quantity(project_materials: Iterable[ProjectMaterial], material_id: int | None) -> int:
    for item in project_materials:
        if item.material_id == material_id:
            return item.quantity or 0
    return 0


def pending_count(requests: Iterable[WorkerRequest]) -> int:
    return sum(1 for request in requests if request.status == RequestStatus.PENDING.value)


def is_milestone_completed(milestone: Milestone) -> bool:
    return milestone.status == MilestoneStatus.COMPLETED.value


def format_date(value: str | None) -> str:
    """`2024-03-05` / ISO timestamps -> `Mar 5, 2024`; empty -> `Not set`."""

    if not value:
        return NOT_SET
    try:
        parsed: date = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return value
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_money(amount: float | None, symbol: str = "₹") -> str:
    if amount is None:
        return "-"
    if float(amount).is_integer():
        return f"{symbol}{int(amount):,}"
    return f"{symbol}{amount:,.2f}"


def home_area(user: User) -> UserType:
    """Area the user lands on after login, decided by the server's `user_type`."""

    if user.user_type == UserType.ADMIN.value:
        return UserType.ADMIN
    if user.user_type == UserType.WORKER.value:
        return UserType.WORKER
    return UserType.USER


@dataclass(frozen=True)
class HiringCandidate:
    user: User
    request_sent: bool


def hiring_candidates(
    candidates: Sequence[User],
    sent_requests: Sequence[WorkerRequest],
    project_id: int,
) -> list[HiringCandidate]:
    """Flag candidates that already have a request for this project."""

    requested = {
        request.worker_id
        for request in sent_requests
        if request.project_id == project_id
    }
    return [HiringCandidate(user=user, request_sent=user.id in requested) for user in candidates]
