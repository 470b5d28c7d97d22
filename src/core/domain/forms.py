"""Client-side form validation.

Each form is a Pydantic model whose validators raise the exact messages shown
to the user. `build_form` turns the first Pydantic error into a
`FormValidationError`, so callers never see raw Pydantic errors.
"""

from __future__ import annotations

import math
import re
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from core.domain.models import (
    Material,
    ProjectStatus,
    RequestStatus,
    UserType,
    WorkerType,
)
from core.errors import FormValidationError

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
PROJECT_STATUS_MESSAGE = "Status must be one of planning, in_progress, completed, cancelled"

F = TypeVar("F", bound=BaseModel)


def build_form(model: type[F], **values: Any) -> F:
    """Validate `values` against `model` and raise `FormValidationError` on the first failure."""

    try:
        return model.model_validate(values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise FormValidationError(first["msg"], field=field) from exc


def _form_error(message: str, **context: Any) -> PydanticCustomError:
    return PydanticCustomError("form_error", message, context or None)


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_float(value: Any, message: str) -> float | None:
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        raise _form_error(message) from None
    if math.isnan(number) or math.isinf(number):
        raise _form_error(message)
    return number


def _parse_int(value: Any, message: str) -> int | None:
    value = _blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise _form_error(message)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise _form_error(message) from None


def _parse_date(value: Any) -> date | None:
    value = _blank_to_none(value)
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise _form_error("Dates must use YYYY-MM-DD") from None


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _iso_or_empty(value: date | None) -> str:
    return value.isoformat() if value else ""


class LoginForm(BaseModel):
    username: str = ""
    password: str = ""
    user_type: UserType | None = UserType.USER

    @field_validator("user_type", mode="before")
    @classmethod
    def _known_user_type(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is None or isinstance(value, UserType):
            return value
        try:
            return UserType(str(value).strip().lower())
        except ValueError:
            raise _form_error("User type must be one of user, worker, admin") from None

    @model_validator(mode="after")
    def _required(self) -> "LoginForm":
        if not self.username or not self.password or self.user_type is None:
            raise _form_error("Please fill all fields")
        return self

    def payload(self) -> dict[str, Any]:
        if self.user_type is None:
            raise FormValidationError("Please fill all fields", field="user_type")
        return {
            "username": self.username,
            "password": self.password,
            "user_type": self.user_type.value,
        }


class RegistrationForm(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    user_type: UserType | None = None
    sub_user_type: WorkerType | None = None

    @field_validator("user_type", "sub_user_type", mode="before")
    @classmethod
    def _empty_choice(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def _check(self) -> "RegistrationForm":
        if not self.username or not self.email or not self.password or self.user_type is None:
            raise _form_error("All fields except sub user type are required")
        if self.user_type is UserType.ADMIN:
            raise _form_error("Admin accounts cannot be registered from the client")
        if not EMAIL_PATTERN.search(self.email):
            raise _form_error("Invalid email format")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise _form_error("Password must be at least 6 chars")
        return self

    def payload(self) -> dict[str, Any]:
        if self.user_type is None:
            raise FormValidationError("All fields except sub user type are required", field="user_type")
        sub_type = None
        if self.user_type is UserType.WORKER and self.sub_user_type is not None:
            sub_type = self.sub_user_type.value
        return {
            "username": self.username,
            "email": self.email,
            "password": self.password,
            "user_type": self.user_type.value,
            "sub_user_type": sub_type,
        }


class ProjectForm(BaseModel):
    """Create/update form for a project (sent as multipart)."""

    name: str = ""
    budget: float | None = Field(default=None, validate_default=True)
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus | None = None
    plan_image: Path | None = None

    @field_validator("budget", mode="before")
    @classmethod
    def _parse_budget(cls, value: Any) -> float | None:
        return _parse_float(value, "Budget must be a number")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> date | None:
        return _parse_date(value)

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is None or isinstance(value, ProjectStatus):
            return value
        try:
            return ProjectStatus(str(value).strip().lower())
        except ValueError:
            raise _form_error(PROJECT_STATUS_MESSAGE) from None

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("plan_image", mode="before")
    @classmethod
    def _image_exists(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is None:
            return None
        path = Path(value).expanduser()
        if not path.is_file():
            raise _form_error("Plan image not found: {path}", path=str(path))
        return path

    @model_validator(mode="after")
    def _required(self) -> "ProjectForm":
        if not self.name or self.budget is None:
            raise _form_error("Name and budget are required")
        return self

    def form_fields(self) -> dict[str, str]:
        """Multipart text fields. Empty values are sent as empty strings."""

        if self.budget is None:
            raise FormValidationError("Name and budget are required", field="budget")
        data = {
            "name": self.name,
            "description": self.description,
            "budget": _format_number(self.budget),
            "start_date": _iso_or_empty(self.start_date),
            "end_date": _iso_or_empty(self.end_date),
        }
        if self.status is not None:
            data["status"] = self.status.value
        return data


class MaterialForm(BaseModel):
    name: str = Field(default="", validate_default=True)
    unit: str = Field(default="", validate_default=True)
    price_per_unit: float | None = Field(default=None, validate_default=True)
    stock_quantity: int | None = Field(default=None, validate_default=True)
    category: str = ""
    description: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise _form_error("Name is required")
        return text

    @field_validator("unit", mode="before")
    @classmethod
    def _unit_required(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise _form_error("Unit is required")
        return text

    @field_validator("price_per_unit", mode="before")
    @classmethod
    def _parse_price(cls, value: Any) -> float:
        price = _parse_float(value, "Valid price per unit is required")
        if price is None:
            raise _form_error("Valid price per unit is required")
        return price

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def _parse_stock(cls, value: Any) -> int:
        stock = _parse_int(value, "Valid stock quantity is required")
        if stock is None:
            raise _form_error("Valid stock quantity is required")
        return stock

    @field_validator("category", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class MilestoneForm(BaseModel):
    project_id: int
    title: str = Field(default="", validate_default=True)
    description: str = ""
    target_date: date | None = None
    status: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise _form_error("Title is required")
        return text

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("target_date", mode="before")
    @classmethod
    def _parse_target(cls, value: Any) -> date | None:
        return _parse_date(value)

    def payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "project_id": self.project_id,
            "title": self.title,
            "description": self.description,
            "target_date": _iso_or_empty(self.target_date),
        }
        if self.status:
            data["status"] = self.status
        return data


class MaterialOrder(BaseModel):
    project_id: int
    material_id: int
    quantity: int = Field(default=0, validate_default=True)

    @field_validator("quantity", mode="before")
    @classmethod
    def _positive_quantity(cls, value: Any) -> int:
        quantity = _parse_int(value, "Please enter a valid quantity")
        if quantity is None or quantity <= 0:
            raise _form_error("Please enter a valid quantity")
        return quantity

    def check_stock(self, material: Material) -> None:
        """Refuse orders larger than the stock the catalogue reports."""

        if material.stock_quantity is not None and self.quantity > material.stock_quantity:
            raise FormValidationError("Quantity exceeds available stock", field="quantity")

    def payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class HireRequestForm(BaseModel):
    worker_id: int
    message: str = Field(default="", validate_default=True)

    @field_validator("message", mode="before")
    @classmethod
    def _message_required(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise _form_error("Please enter a message for the worker")
        return text

    def payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class RequestResponseForm(BaseModel):
    status: RequestStatus

    @field_validator("status", mode="before")
    @classmethod
    def _accept_or_reject(cls, value: Any) -> RequestStatus:
        if isinstance(value, RequestStatus):
            status = value
        else:
            try:
                status = RequestStatus(str(value).strip().lower())
            except ValueError:
                status = RequestStatus.PENDING
        if status is RequestStatus.PENDING:
            raise _form_error("Status must be accepted or rejected")
        return status

    def payload(self) -> dict[str, Any]:
        return {"status": self.status.value}
