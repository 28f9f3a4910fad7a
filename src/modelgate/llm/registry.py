"""Static table of the models each provider can serve.

Model names are only unique within one provider: the same name may be listed
under ``ai-sdk`` and ``sap-ai-sdk`` because it is reached through a different
transport and credential scheme.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .backends import AnthropicBackend, GoogleBackend, OpenAIBackend
from .base import BackendFactory
from .errors import UnknownModelError, UnknownProviderError
from .types import ProviderType


@dataclass(frozen=True)
class SdkModel:
    """A model called directly through a vendor SDK with an API key."""

    name: str
    backend: BackendFactory
    temperature: Optional[float] = None


@dataclass(frozen=True)
class GatewayModel:
    """A model behind the SAP AI Core gateway, addressed by name alone."""

    name: str
    temperature: Optional[float] = None


ModelDescriptor = Union[SdkModel, GatewayModel]


def _sdk(name: str, backend: BackendFactory, temperature: Optional[float] = None):
    return SdkModel(name=name, backend=backend, temperature=temperature)


LLM_MODELS: Mapping[ProviderType, tuple[ModelDescriptor, ...]] = MappingProxyType(
    {
        ProviderType.AI_SDK: (
            # Anthropic
            _sdk("claude-3-5-sonnet-20240620", AnthropicBackend),
            _sdk("claude-3-5-sonnet-20241022", AnthropicBackend),
            _sdk("claude-3-7-sonnet-20250219", AnthropicBackend),
            # OpenAI
            _sdk("gpt-4.1-mini", OpenAIBackend),
            _sdk("gpt-4o-mini", OpenAIBackend),
            _sdk("o1", OpenAIBackend),
            _sdk("o1-mini", OpenAIBackend),
            # reasoning models only accept the default temperature
            _sdk("o3-mini", OpenAIBackend, temperature=1),
            _sdk("o4-mini", OpenAIBackend, temperature=1),
            # Google stable models
            _sdk("gemini-2.0-flash-001", GoogleBackend),
            _sdk("gemini-2.0-flash-lite-preview-02-05", GoogleBackend),
            _sdk("gemini-1.5-flash", GoogleBackend),
            _sdk("gemini-1.5-flash-latest", GoogleBackend),
            _sdk("gemini-1.5-flash-8b", GoogleBackend),
            _sdk("gemini-1.5-pro", GoogleBackend),
            # Google experimental models
            _sdk("gemini-2.5-pro-preview-05-06", GoogleBackend),
            _sdk("gemini-2.5-flash-preview-04-17", GoogleBackend),
            _sdk("gemini-2.0-pro-exp-02-05", GoogleBackend),
            _sdk("gemini-2.0-flash-thinking-exp-01-21", GoogleBackend),
        ),
        ProviderType.SAP_AI_SDK: tuple(
            GatewayModel(name=name)
            for name in (
                "anthropic--claude-3.7-sonnet",
                "anthropic--claude-3.5-sonnet",
                "anthropic--claude-3-sonnet",
                "anthropic--claude-3-haiku",
                "anthropic--claude-3-opus",
                "gpt-4o",
                "gpt-4",
                "gpt-4o-mini",
                "o1",
                "gpt-4.1",
                "gpt-4.1-nano",
                "o3-mini",
                "o3",
                "o4-mini",
            )
        ),
    }
)


def valid_providers() -> list[str]:
    return [p.value for p in ProviderType]


def parse_provider(raw: str) -> ProviderType:
    """Exact match against the closed set of provider identifiers."""
    try:
        return ProviderType(raw)
    except ValueError:
        raise UnknownProviderError(raw, valid_providers()) from None


def models_for(provider: Union[ProviderType, str]) -> tuple[ModelDescriptor, ...]:
    if not isinstance(provider, ProviderType):
        provider = parse_provider(provider)
    return LLM_MODELS[provider]


def lookup(provider: Union[ProviderType, str], model_name: str) -> ModelDescriptor:
    models = models_for(provider)
    for descriptor in models:
        if descriptor.name == model_name:
            return descriptor
    raise UnknownModelError(
        ProviderType(provider).value, model_name, [m.name for m in models]
    )
