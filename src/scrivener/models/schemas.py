# src/scrivener/models/schemas.py
"""JSON schema export for the public models.

An external synthesis path (for example an LLM-backed one) can validate its
output against these schemas to stay interchangeable at the envelope level.
"""

from __future__ import annotations

import json
from inspect import isclass
from pathlib import Path
from typing import Any

from .base_model import ScrivenerBaseModel


def iter_models() -> list[type[ScrivenerBaseModel]]:
    """Return all public models that subclass :class:`ScrivenerBaseModel`."""
    from scrivener import models

    result: list[type[ScrivenerBaseModel]] = []
    for name in getattr(models, "__all__", []):
        obj = getattr(models, name, None)
        if (
            isclass(obj)
            and issubclass(obj, ScrivenerBaseModel)
            and obj is not ScrivenerBaseModel
        ):
            result.append(obj)
    return result


def model_schemas() -> dict[str, dict[str, Any]]:
    """Map model name to its serialization-mode JSON schema (camelCase keys)."""
    return {
        model.__name__: model.model_json_schema(by_alias=True, mode="serialization")
        for model in iter_models()
    }


def export_json_schemas(out_dir: Path) -> list[Path]:
    """Write one ``<Model>.json`` file per public model into ``out_dir``."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, schema in model_schemas().items():
        path = out_dir / f"{name}.json"
        path.write_text(json.dumps(schema, indent=2, sort_keys=True), encoding="utf-8")
        written.append(path)
    return written


__all__ = ["iter_models", "model_schemas", "export_json_schemas"]
