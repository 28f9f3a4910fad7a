from __future__ import annotations

from typing import Any, Optional

from modelgate import logger as logger_mod

from ._json import check_schema, parse_and_validate
from .base import BackendFactory, effective_temperature
from .errors import BackendError, CredentialError, LLMError
from .types import InferenceRequest

log = logger_mod.get_logger()


def _status_code(e: Exception) -> Optional[int]:
    # openai/anthropic expose status_code, google-genai exposes code
    for attr in ("status_code", "code"):
        value = getattr(e, attr, None)
        if isinstance(value, int):
            return value
    return None


class AISDKProvider:
    """Calls a hosted model directly through its vendor SDK with an API key."""

    def __init__(
        self,
        backend: BackendFactory,
        model: str,
        *,
        api_key: Optional[str],
        temperature: Optional[float] = None,
        timeout_s: float = 60.0,
    ):
        self.backend = backend
        self.model = model
        self.temperature = temperature
        self.timeout_s = timeout_s
        self._api_key = api_key

    def run_inference(self, request: InferenceRequest) -> dict[str, Any]:
        check_schema(request.schema)
        if not self._api_key:
            raise CredentialError(f"LLM_API_KEY is not set (model {self.model})")

        temperature = effective_temperature(self.temperature, request)
        log.debug(f"ai-sdk request: model={self.model} temperature={temperature}")

        try:
            client = self.backend(self._api_key, self.timeout_s)
            raw = client.generate(
                model=self.model,
                messages=request.messages(),
                json_schema=request.schema,
                schema_name=request.schema_name,
                temperature=temperature,
            )
        except LLMError:
            raise
        except Exception as e:  # noqa: BLE001
            raise BackendError(
                f"ai-sdk call to {self.model} failed: {e}", status_code=_status_code(e)
            ) from e

        return parse_and_validate(raw, request.schema)
