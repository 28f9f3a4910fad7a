"""Helpers for building the JSON Schemas passed as ``InferenceRequest.schema``.

Any JSON Schema object works; these cover the two shapes callers use most:
a fixed set of named fields, and a fully permissive object.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional


def object_schema(
    properties: Mapping[str, Mapping[str, Any]],
    required: Optional[Iterable[str]] = None,
    allow_extra: bool = False,
) -> dict[str, Any]:
    """Object schema with the given fields.

    All fields are required unless ``required`` names a subset. ``allow_extra``
    accepts unknown extra fields.
    """

    return {
        "type": "object",
        "properties": {name: dict(spec) for name, spec in properties.items()},
        "required": list(properties if required is None else required),
        "additionalProperties": allow_extra,
    }


def permissive_schema() -> dict[str, Any]:
    """Any JSON object."""
    return {"type": "object", "additionalProperties": True}
