"""Serialize loaded models to JSON or YAML text."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

FORMATS = ("json", "yaml")


def model_to_data(model: BaseModel, *, include_events: bool = True) -> dict[str, Any]:
    """Plain JSON-compatible data using wire (camelCase) names."""
    # mode="json" avoids Python-specific YAML tags
    exclude = None
    if not include_events and "contexts" in type(model).model_fields:
        exclude = {"contexts": {"__all__": {"events"}}}
    return model.model_dump(mode="json", by_alias=True, exclude=exclude)


def dump_model(model: BaseModel, fmt: str = "json", *, include_events: bool = True) -> str:
    """Render *model* as ``json`` or ``yaml`` text.

    Raises:
        ValueError: If *fmt* is not a supported format.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported format {fmt!r}, expected one of {FORMATS}")
    data = model_to_data(model, include_events=include_events)
    if fmt == "yaml":
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2)


def save_model(model: BaseModel, path: Path, fmt: str = "json", *, include_events: bool = True) -> None:
    """Write *model* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_model(model, fmt, include_events=include_events))
