"""Exportación JSON de entidades.

Interoperabilidad con hojas de cálculo, scripts y pipelines: se vuelca lo que
devolvió el backend, incluidos los campos que el cliente no modela.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel


def export_json(*, entities: BaseModel | Sequence[BaseModel], output_path: Path) -> Path:
    """Exporta una entidad o una lista a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(entities, BaseModel):
        payload: object = entities.model_dump(mode="json")
    else:
        payload = [entity.model_dump(mode="json") for entity in entities]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
