"""Error types shared by the API client, workflows and the CLI.

The CLI maps each family to an alert panel and an exit code; adapters only
raise them.
"""

from __future__ import annotations

from typing import Any

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."


class BuildlinkError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message


class FormValidationError(BuildlinkError):
    """Client-side form validation failed; nothing was sent."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NetworkError(BuildlinkError):
    """The backend could not be reached (DNS, refused connection, timeout)."""


class ApiError(BuildlinkError):
    """The backend answered with a 4xx/5xx status."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        *,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        if self.message:
            return f"HTTP {self.status_code}: {self.message}"
        return f"HTTP {self.status_code}"


class AuthenticationError(ApiError):
    """401: missing, invalid or expired token."""


class PermissionDeniedError(ApiError):
    """403: the current role cannot perform the action."""


class NotFoundError(ApiError):
    """404: the entity does not exist (or is not visible to this user)."""


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
}


def error_message_from_payload(payload: Any) -> str | None:
    """Pull the human message out of an error body (`error`, then `message`)."""

    if not isinstance(payload, dict):
        return None
    for key in ("error", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def api_error_for(status_code: int, payload: Any = None) -> ApiError:
    cls = _STATUS_ERRORS.get(status_code, ApiError)
    return cls(status_code, error_message_from_payload(payload), payload=payload)
