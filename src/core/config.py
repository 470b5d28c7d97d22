"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores (HTTP, token store) leen la config desde aquí.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_DIR_NAME = "buildlink"
ENV_FILE_HEADER = "# BuildLink user config (.env)"


def get_user_config_dir() -> Path:
    """Directorio por usuario: %APPDATA%, Application Support o $XDG_CONFIG_HOME."""

    home = Path.home()
    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or home)
    elif sys.platform == "darwin":
        root = home / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
    return root / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_env_file(path: Path) -> dict[str, str]:
    """`KEY=VALUE` por línea; comentarios y líneas sin `=` se ignoran."""

    if not path.is_file():
        return {}
    entries: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if sep and key and not key.startswith("#"):
            entries[key] = value.strip().strip("\"'")
    return entries


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Actualiza claves del .env de usuario y conserva las demás en su orden."""

    env_path = get_user_env_file()
    entries = read_env_file(env_path)
    entries.update({key: value for key, value in values.items() if value is not None})

    env_path.parent.mkdir(parents=True, exist_ok=True)
    lines = [ENV_FILE_HEADER, *(f"{key}={value}" for key, value in entries.items())]
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDLINK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default="http://localhost:5000/api",
        min_length=8,
        description="Base URL del backend REST (todas las rutas cuelgan de /api).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="buildlink/0.1",
        min_length=1,
        description="User-Agent enviado al backend.",
    )
    token_path: Path | None = Field(
        default=None,
        description="Fichero donde se guarda el bearer token (por defecto en el directorio de config).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging por defecto (DEBUG, INFO, WARNING...).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Fichero opcional para logs detallados.",
    )

    currency_symbol: str = Field(
        default="₹",
        description="Símbolo usado al mostrar presupuestos y precios.",
    )

    def resolved_token_path(self) -> Path:
        return self.token_path or get_user_config_dir() / "auth_token"
