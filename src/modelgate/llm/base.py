from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from .types import InferenceRequest, LLMMessage


class Provider(Protocol):
    """The one operation every backend family implements."""

    def run_inference(self, request: InferenceRequest) -> dict[str, Any]:
        """Run a structured inference call and return the schema-validated result."""
        raise NotImplementedError


class ChatBackend(Protocol):
    """A vendor SDK client able to produce JSON text for a schema."""

    def generate(
        self,
        *,
        model: str,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str,
        temperature: Optional[float],
    ) -> str:
        raise NotImplementedError


# backend(api_key, timeout_s) -> ChatBackend
BackendFactory = Callable[[str, float], ChatBackend]


def effective_temperature(
    override: Optional[float], request: InferenceRequest
) -> Optional[float]:
    """A model's fixed temperature wins over whatever the caller asked for."""
    if override is not None:
        return override
    return request.temperature
