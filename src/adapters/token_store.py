"""Almacenes del bearer token.

`FileTokenStore` guarda el token en un fichero del directorio de config del
usuario (permisos 0600). `MemoryTokenStore` sirve para tests y usos embebidos.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from core.config import AppSettings

logger = logging.getLogger(__name__)


class FileTokenStore:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "FileTokenStore":
        settings = settings or AppSettings()
        return cls(settings.resolved_token_path())

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        try:
            token = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Error getting token from %s: %s", self._path, exc)
            return None
        return token or None

    def set(self, token: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(token + "\n", encoding="utf-8")
            os.chmod(self._path, 0o600)
        except OSError as exc:
            logger.warning("Error saving token to %s: %s", self._path, exc)
            return
        logger.debug("Token saved to %s", self._path)

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Error removing token %s: %s", self._path, exc)
            return
        logger.debug("Token removed")


class MemoryTokenStore:
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None
