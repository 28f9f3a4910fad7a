from __future__ import annotations

import json
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from .errors import LLMConfigError, SchemaViolationError


def parse_json(text: str) -> dict[str, Any]:
    """Parse JSON from a model response.

    Assumes the provider was instructed to return JSON only. Tolerates a
    surrounding markdown code fence.
    """

    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]

    try:
        data = json.loads(cleaned)
    except ValueError as e:
        raise SchemaViolationError(
            f"Failed to parse JSON: {e}", raw_text=text, diagnostics=[str(e)]
        ) from e

    if not isinstance(data, dict):
        raise SchemaViolationError(
            "Model response is not a JSON object",
            raw_text=text,
            diagnostics=[f"expected object, got {type(data).__name__}"],
        )
    return data


def check_schema(schema: dict[str, Any]) -> None:
    """Reject a malformed caller schema before it reaches a backend."""
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise LLMConfigError(f"Invalid output schema: {e.message}") from e


def validate_json(instance: dict[str, Any], schema: dict[str, Any], raw_text: str) -> None:
    check_schema(schema)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.json_path)
    if not errors:
        return

    diagnostics = [f"{e.json_path}: {e.message}" for e in errors]
    raise SchemaViolationError(
        f"JSON schema validation failed: {errors[0].message}",
        raw_text=raw_text,
        diagnostics=diagnostics,
    )


def parse_and_validate(text: str, schema: dict[str, Any]) -> dict[str, Any]:
    data = parse_json(text)
    validate_json(data, schema, raw_text=text)
    return data
