from __future__ import annotations

from typing import Any, Optional

from modelgate import logger as logger_mod
from modelgate.config import Settings

from .factory import build_provider
from .registry import lookup, parse_provider
from .types import InferenceRequest

log = logger_mod.get_logger()


def infer(
    provider_raw: str,
    model_raw: str,
    request: InferenceRequest,
    settings: Settings,
) -> dict[str, Any]:
    """Validate the provider/model pair, build the adapter and run one call.

    Errors from every step propagate unchanged.
    """

    provider = parse_provider(provider_raw)
    descriptor = lookup(provider, model_raw)
    adapter = build_provider(provider, descriptor, settings)

    log.info(f"Running inference: provider={provider.value} model={descriptor.name}")
    return adapter.run_inference(request)


def run_prompt(
    prompt: str,
    schema: dict[str, Any],
    system_prompt: Optional[str] = None,
    *,
    temperature: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> dict[str, Any]:
    """Run ``prompt`` against the configured provider and model."""

    settings = settings or Settings.from_env()
    request = InferenceRequest(
        prompt=prompt, schema=schema, system=system_prompt, temperature=temperature
    )
    return infer(settings.llm_provider, settings.llm_model, request, settings)
