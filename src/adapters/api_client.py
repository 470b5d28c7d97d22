"""Cliente del backend REST de BuildLink.

Una coroutine por endpoint. Cada método valida la respuesta contra el modelo
del dominio y traduce fallos HTTP/transporte a las excepciones de
`core.errors`. No hay reintentos: una acción = una petición.
"""

from __future__ import annotations

import logging
import mimetypes
from types import TracebackType
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.forms import (
    HireRequestForm,
    LoginForm,
    MaterialForm,
    MaterialOrder,
    MilestoneForm,
    ProjectForm,
    RegistrationForm,
    RequestResponseForm,
)
from core.domain.models import (
    LoginResult,
    Material,
    Milestone,
    Project,
    ProjectMaterial,
    User,
    WorkerRequest,
)
from core.errors import ApiError, NetworkError, api_error_for
from core.interfaces.token_store import TokenStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _validated(model: type[M], item: Any) -> M:
    try:
        return model.model_validate(item)
    except ValidationError as exc:
        logger.debug("Unexpected %s payload: %s", model.__name__, exc)
        raise ApiError(200, "Unexpected response", payload=item) from exc


def _as_list(model: type[M], payload: Any) -> list[M]:
    if payload is None:
        return []
    if isinstance(payload, dict):
        # Algunos endpoints envuelven la lista: {"projects": [...]} / {"data": [...]}
        for value in payload.values():
            if isinstance(value, list):
                payload = value
                break
        else:
            raise ApiError(200, f"Expected a list of {model.__name__}", payload=payload)
    return [_validated(model, item) for item in payload if isinstance(item, dict)]


def _as_model(model: type[M], payload: Any) -> M:
    if not isinstance(payload, dict):
        raise ApiError(200, f"Expected a {model.__name__} object", payload=payload)
    return _validated(model, payload)


class BuildlinkApi:
    """Fachada asíncrona sobre `httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        token_store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BuildlinkApi":
        client = build_async_client(settings, token_store=token_store, transport=transport)
        return cls(client)

    async def __aenter__(self) -> "BuildlinkApi":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Request timed out: {method} {url}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        payload: Any = None
        if response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = None
                if response.is_success:
                    raise ApiError(response.status_code, "Invalid JSON response")

        if response.is_error:
            logger.debug("%s %s failed: %s %s", method, url, response.status_code, payload)
            raise api_error_for(response.status_code, payload)
        return payload

    # -- auth ---------------------------------------------------------------

    async def login(self, form: LoginForm) -> LoginResult:
        payload = await self._request("POST", "/auth/login", json=form.payload())
        return _as_model(LoginResult, payload)

    async def register(self, form: RegistrationForm) -> dict[str, Any]:
        payload = await self._request("POST", "/auth/register", json=form.payload())
        return payload if isinstance(payload, dict) else {}

    async def me(self) -> User:
        payload = await self._request("GET", "/auth/me")
        if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
            payload = payload["user"]
        return _as_model(User, payload)

    async def get_user(self, user_id: int) -> User:
        return _as_model(User, await self._request("GET", f"/auth/users/{user_id}"))

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/auth/users/{user_id}")

    # -- projects -----------------------------------------------------------

    async def list_projects(self) -> list[Project]:
        return _as_list(Project, await self._request("GET", "/projects"))

    async def create_project(self, form: ProjectForm) -> Project:
        return await self._send_project("POST", "/projects", form)

    async def update_project(self, project_id: int, form: ProjectForm) -> Project:
        return await self._send_project("PUT", f"/projects/{project_id}", form)

    async def _send_project(self, method: str, url: str, form: ProjectForm) -> Project:
        # Campos de texto como partes sin filename: siempre multipart, haya imagen o no.
        parts: list[tuple[str, Any]] = [
            (key, (None, value)) for key, value in form.form_fields().items()
        ]
        if form.plan_image is None:
            payload = await self._request(method, url, files=parts)
            return _as_model(Project, payload)

        content_type = mimetypes.guess_type(form.plan_image.name)[0] or "image/jpeg"
        with form.plan_image.open("rb") as handle:
            parts.append(("plan_image", (form.plan_image.name, handle, content_type)))
            payload = await self._request(method, url, files=parts)
        return _as_model(Project, payload)

    async def delete_project(self, project_id: int) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    async def available_engineers(self) -> list[User]:
        return _as_list(User, await self._request("GET", "/projects/available-engineers"))

    async def available_workers(self) -> list[User]:
        return _as_list(User, await self._request("GET", "/projects/available-workers"))

    async def request_worker(self, project_id: int, form: HireRequestForm) -> dict[str, Any]:
        payload = await self._request(
            "POST", f"/projects/{project_id}/request-worker", json=form.payload()
        )
        return payload if isinstance(payload, dict) else {}

    # -- worker requests ----------------------------------------------------

    async def sent_requests(self) -> list[WorkerRequest]:
        """Solicitudes enviadas por el cliente autenticado."""

        return _as_list(WorkerRequest, await self._request("GET", "/workers/worker_requests"))

    async def received_requests(self) -> list[WorkerRequest]:
        """Solicitudes recibidas por el worker autenticado."""

        return _as_list(WorkerRequest, await self._request("GET", "/workers/requests"))

    async def respond_to_request(self, request_id: int, form: RequestResponseForm) -> dict[str, Any]:
        payload = await self._request(
            "PUT", f"/workers/requests/{request_id}/respond", json=form.payload()
        )
        return payload if isinstance(payload, dict) else {}

    # -- materials ----------------------------------------------------------

    async def list_materials(self) -> list[Material]:
        return _as_list(Material, await self._request("GET", "/materials"))

    async def create_material(self, form: MaterialForm) -> Material:
        return _as_model(Material, await self._request("POST", "/materials", json=form.payload()))

    async def update_material(self, material_id: int, form: MaterialForm) -> Material:
        payload = await self._request("PUT", f"/materials/{material_id}", json=form.payload())
        return _as_model(Material, payload)

    async def delete_material(self, material_id: int) -> None:
        await self._request("DELETE", f"/materials/{material_id}")

    async def project_materials(self, project_id: int) -> list[ProjectMaterial]:
        return _as_list(ProjectMaterial, await self._request("GET", f"/materials/project/{project_id}"))

    async def order_material(self, order: MaterialOrder) -> dict[str, Any]:
        payload = await self._request("POST", "/materials/order", json=order.payload())
        return payload if isinstance(payload, dict) else {}

    # -- milestones ---------------------------------------------------------

    async def project_milestones(self, project_id: int) -> list[Milestone]:
        return _as_list(Milestone, await self._request("GET", f"/milestones/project/{project_id}"))

    async def create_milestone(self, form: MilestoneForm) -> dict[str, Any]:
        payload = await self._request("POST", "/milestones", json=form.payload())
        return payload if isinstance(payload, dict) else {}

    async def update_milestone(self, milestone_id: int, form: MilestoneForm) -> dict[str, Any]:
        payload = await self._request("PUT", f"/milestones/{milestone_id}", json=form.payload())
        return payload if isinstance(payload, dict) else {}

    async def delete_milestone(self, milestone_id: int) -> None:
        await self._request("DELETE", f"/milestones/{milestone_id}")

    async def complete_milestone(self, milestone_id: int) -> dict[str, Any]:
        payload = await self._request("PUT", f"/milestones/{milestone_id}/complete")
        return payload if isinstance(payload, dict) else {}
