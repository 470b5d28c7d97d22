"""Contrato del almacén del bearer token."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Persistencia mínima del token de sesión.

    Reglas:
    - `get` devuelve `None` si no hay sesión.
    - Las operaciones son best-effort: un fallo de I/O se registra y no rompe
      la petición en curso.
    """

    def get(self) -> str | None:
        ...

    def set(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...
