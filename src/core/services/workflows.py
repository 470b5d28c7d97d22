"""Multi-request user actions.

Each helper is one user action: validate locally, read whatever it needs from
the backend, then send the write. Requests run sequentially. The CLI only
handles printing and prompting; tests and other entry-points can call these
directly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from adapters.api_client import BuildlinkApi
from core.domain.forms import (
    HireRequestForm,
    LoginForm,
    MaterialForm,
    MaterialOrder,
    MilestoneForm,
    ProjectForm,
    RequestResponseForm,
    build_form,
)
from core.domain.models import (
    LoginResult,
    Material,
    Milestone,
    Project,
    ProjectMaterial,
    ProjectStatus,
    RequestStatus,
    WorkerRequest,
)
from core.errors import ApiError, FormValidationError, NotFoundError
from core.interfaces.token_store import TokenStore
from core.services.project_views import (
    HiringCandidate,
    hiring_candidates,
    is_milestone_completed,
)

logger = logging.getLogger(__name__)

_PROJECT_STATUSES = {status.value for status in ProjectStatus}
HIRE_REQUIRES_PLANNING = "Workers can only be hired while the project is in planning"


def _merge(current: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    merged = dict(current)
    merged.update({key: value for key, value in changes.items() if value is not None})
    return merged


async def login(api: BuildlinkApi, store: TokenStore, form: LoginForm) -> LoginResult:
    result = await api.login(form)
    store.set(result.token)
    logger.info("Login successful for user: %s as %s", result.user.username, result.user.user_type)
    return result


# -- projects -----------------------------------------------------------------


async def find_project(api: BuildlinkApi, project_id: int) -> Project:
    for project in await api.list_projects():
        if project.id == project_id:
            return project
    raise NotFoundError(404, f"Project {project_id} not found")


async def update_project(
    api: BuildlinkApi,
    project_id: int,
    *,
    name: str | None = None,
    budget: str | float | None = None,
    description: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    status: str | None = None,
    plan_image: Path | None = None,
) -> Project:
    """Edit a project starting from its current values; `None` keeps a field."""

    current = await find_project(api, project_id)
    current_status = current.status
    if current_status not in _PROJECT_STATUSES:
        # Leave statuses the client cannot represent to the server.
        logger.debug("Not resending unknown status %r for project %s", current_status, project_id)
        current_status = None
    values = _merge(
        {
            "name": current.name,
            "budget": current.budget,
            "description": current.description,
            "start_date": current.start_date,
            "end_date": current.end_date,
            "status": current_status,
        },
        {
            "name": name,
            "budget": budget,
            "description": description,
            "start_date": start_date,
            "end_date": end_date,
            "status": status,
            "plan_image": plan_image,
        },
    )
    # Timestamps from the backend may carry a time part; the form wants dates.
    for key in ("start_date", "end_date"):
        if isinstance(values.get(key), str) and "T" in values[key]:
            values[key] = values[key].split("T", 1)[0]
    form = build_form(ProjectForm, **values)
    return await api.update_project(project_id, form)


# -- materials ----------------------------------------------------------------


async def find_material(api: BuildlinkApi, material_id: int) -> Material:
    for material in await api.list_materials():
        if material.id == material_id:
            return material
    raise NotFoundError(404, f"Material {material_id} not found")


async def update_material(api: BuildlinkApi, material_id: int, **changes: Any) -> Material:
    current = await find_material(api, material_id)
    values = _merge(
        current.model_dump(
            include={"name", "unit", "price_per_unit", "stock_quantity", "category", "description"}
        ),
        changes,
    )
    form = build_form(MaterialForm, **values)
    return await api.update_material(material_id, form)


async def order_material(
    api: BuildlinkApi,
    *,
    project_id: int,
    material_id: int,
    quantity: Any,
) -> dict[str, Any]:
    """Validate the quantity against the catalogue stock, then order."""

    order = build_form(MaterialOrder, project_id=project_id, material_id=material_id, quantity=quantity)
    material = await find_material(api, material_id)
    order.check_stock(material)
    return await api.order_material(order)


async def project_materials_or_empty(api: BuildlinkApi, project_id: int) -> list[ProjectMaterial]:
    try:
        return await api.project_materials(project_id)
    except ApiError as exc:
        # The catalogue still renders, with nothing marked as ordered.
        logger.warning("Error fetching project materials: %s", exc)
        return []


# -- milestones ---------------------------------------------------------------


async def find_milestone(api: BuildlinkApi, project_id: int, milestone_id: int) -> Milestone:
    for milestone in await api.project_milestones(project_id):
        if milestone.id == milestone_id:
            return milestone
    raise NotFoundError(404, f"Milestone {milestone_id} not found in project {project_id}")


async def update_milestone(
    api: BuildlinkApi,
    *,
    project_id: int,
    milestone_id: int,
    title: str | None = None,
    description: str | None = None,
    target_date: str | None = None,
) -> dict[str, Any]:
    """Edit a milestone; its current status is sent back unchanged."""

    current = await find_milestone(api, project_id, milestone_id)
    target = current.target_date
    if target and "T" in target:
        target = target.split("T", 1)[0]
    values = _merge(
        {
            "project_id": project_id,
            "title": current.title,
            "description": current.description,
            "target_date": target,
            "status": current.status,
        },
        {"title": title, "description": description, "target_date": target_date},
    )
    form = build_form(MilestoneForm, **values)
    return await api.update_milestone(milestone_id, form)


async def complete_milestone(
    api: BuildlinkApi,
    milestone_id: int,
    *,
    project_id: int | None = None,
) -> dict[str, Any]:
    """Mark a milestone completed. With `project_id`, refuse completed ones locally."""

    if project_id is not None:
        milestone = await find_milestone(api, project_id, milestone_id)
        if is_milestone_completed(milestone):
            raise FormValidationError("Milestone is already completed")
    return await api.complete_milestone(milestone_id)


# -- hiring -------------------------------------------------------------------


async def _sent_requests_or_empty(api: BuildlinkApi) -> list[WorkerRequest]:
    try:
        return await api.sent_requests()
    except ApiError as exc:
        # The candidate list is still useful without the "request sent" flags.
        logger.warning("Error fetching worker requests: %s", exc)
        return []


async def list_candidates(
    api: BuildlinkApi,
    project_id: int,
    *,
    engineers: bool,
) -> list[HiringCandidate]:
    users = await (api.available_engineers() if engineers else api.available_workers())
    sent = await _sent_requests_or_empty(api)
    return hiring_candidates(users, sent, project_id)


async def send_hire_request(
    api: BuildlinkApi,
    *,
    project_id: int,
    worker_id: int,
    message: str,
) -> dict[str, Any]:
    """Send a hiring request; only planning projects can hire, once per worker."""

    form = build_form(HireRequestForm, worker_id=worker_id, message=message)
    project = await find_project(api, project_id)
    if project.status != ProjectStatus.PLANNING.value:
        raise FormValidationError(HIRE_REQUIRES_PLANNING)
    sent = await _sent_requests_or_empty(api)
    if any(r.project_id == project_id and r.worker_id == worker_id for r in sent):
        raise FormValidationError("Request already sent to this worker for this project")
    return await api.request_worker(project_id, form)


async def find_received_request(api: BuildlinkApi, request_id: int) -> WorkerRequest:
    for request in await api.received_requests():
        if request.id == request_id:
            return request
    raise NotFoundError(404, f"Request {request_id} not found")


async def respond_to_request(api: BuildlinkApi, request_id: int, status: str) -> dict[str, Any]:
    """Accept or reject a received request that is still pending."""

    form = build_form(RequestResponseForm, status=status)
    request = await find_received_request(api, request_id)
    if request.status != RequestStatus.PENDING.value:
        raise FormValidationError(f"Request already {request.status or 'answered'}")
    return await api.respond_to_request(request_id, form)
