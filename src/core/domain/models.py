"""Modelos del dominio (Pydantic v2).

Las entidades llegan del backend tal cual; el cliente no impone invariantes
más allá de tipos básicos. `extra="allow"` conserva cualquier campo que el
backend añada, de forma que exportar a JSON no pierde información.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class UserType(str, Enum):
    USER = "user"
    WORKER = "worker"
    ADMIN = "admin"


class WorkerType(str, Enum):
    CIVIL_ENGINEER = "civil_engineer"
    PAINTER = "painter"
    PLUMBER = "plumber"
    ELECTRICIAN = "electrician"
    OTHER = "other"

    def label(self) -> str:
        return self.value.replace("_", " ").title()


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def label(self) -> str:
        return {
            ProjectStatus.PLANNING: "Planning",
            ProjectStatus.IN_PROGRESS: "In Progress",
            ProjectStatus.COMPLETED: "Completed",
            ProjectStatus.CANCELLED: "Cancelled",
        }[self]


class MilestoneStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class RequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def label(self) -> str:
        return self.value.capitalize()


class ApiEntity(BaseModel):
    """Base de las entidades devueltas por el backend."""

    model_config = ConfigDict(extra="allow")


class User(ApiEntity):
    id: int | None = None
    username: str | None = Field(default=None, description="Login name.")
    email: str | None = None
    user_type: str | None = Field(
        default=None,
        description="Rol según el servidor: user, worker o admin.",
    )
    sub_user_type: str | None = Field(
        default=None,
        description="Oficio del worker (civil_engineer, painter...).",
    )
    is_available: bool | None = None
    created_at: str | None = None


class Project(ApiEntity):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    budget: float | None = None
    status: str | None = None
    plan_image_url: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    created_by_name: str | None = Field(
        default=None,
        description="Cliente que creó el proyecto.",
    )
    civil_engineer_id: int | None = None
    civil_engineer_name: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Material(ApiEntity):
    id: int | None = None
    name: str | None = None
    unit: str | None = None
    price_per_unit: float | None = None
    stock_quantity: int | None = None
    category: str | None = None
    description: str | None = None


class ProjectMaterial(ApiEntity):
    """Material ya pedido para un proyecto."""

    material_id: int | None = None
    quantity: int | None = None


class Milestone(ApiEntity):
    id: int | None = None
    project_id: int | None = None
    title: str | None = None
    description: str | None = None
    target_date: str | None = None
    status: str | None = None
    completion_date: str | None = None


class WorkerRequest(ApiEntity):
    """Solicitud de contratación (cliente -> worker)."""

    id: int | None = None
    project_id: int | None = None
    worker_id: int | None = None
    message: str | None = None
    status: str | None = None
    project_name: str | None = None
    project_description: str | None = None
    budget: float | None = None
    plan_image_url: str | None = None
    requested_by_name: str | None = None
    created_at: str | None = None
    responded_at: str | None = None


class LoginResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., min_length=1)
    user: User
