"""Provider-agnostic structured inference.

Design goals:
- Keep provider-specific SDKs and credential schemes isolated.
- One small interface: prompt + JSON Schema in, validated JSON out.
- Fail loudly on unknown providers/models before any network call.
"""

from .errors import (
    BackendError,
    CredentialError,
    LLMConfigError,
    LLMError,
    SchemaViolationError,
    UnknownModelError,
    UnknownProviderError,
)
from .factory import build_provider
from .registry import LLM_MODELS, GatewayModel, SdkModel, lookup
from .runner import infer, run_prompt
from .schema import object_schema, permissive_schema
from .types import InferenceRequest, ProviderType

__all__ = [
    "BackendError",
    "CredentialError",
    "GatewayModel",
    "InferenceRequest",
    "LLMConfigError",
    "LLMError",
    "LLM_MODELS",
    "ProviderType",
    "SchemaViolationError",
    "SdkModel",
    "UnknownModelError",
    "UnknownProviderError",
    "build_provider",
    "infer",
    "lookup",
    "object_schema",
    "permissive_schema",
    "run_prompt",
]
