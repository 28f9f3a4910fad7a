from __future__ import annotations

from typing import Union, assert_never

from modelgate.config import Settings

from .base import Provider
from .errors import LLMConfigError
from .registry import GatewayModel, ModelDescriptor, SdkModel, parse_provider
from .sap_provider import SAPAIProvider
from .sdk_provider import AISDKProvider
from .types import ProviderType


def build_provider(
    provider: Union[ProviderType, str],
    descriptor: ModelDescriptor,
    settings: Settings,
) -> Provider:
    """Factory for provider clients.

    Pure dispatch: no I/O and no credential fetch happens here. Adding a
    backend family means a new ``ProviderType`` member, a registry partition
    and a case below; type checkers flag a missing case via ``assert_never``.
    """

    if not isinstance(provider, ProviderType):
        provider = parse_provider(provider)

    match provider:
        case ProviderType.AI_SDK:
            if not isinstance(descriptor, SdkModel):
                raise LLMConfigError(
                    f"No backend factory found for model {descriptor.name}"
                )
            return AISDKProvider(
                descriptor.backend,
                descriptor.name,
                api_key=settings.llm_api_key,
                temperature=descriptor.temperature,
                timeout_s=settings.timeout_s,
            )
        case ProviderType.SAP_AI_SDK:
            if not isinstance(descriptor, GatewayModel):
                raise LLMConfigError(
                    f"Model {descriptor.name} is not a SAP AI Core gateway model"
                )
            return SAPAIProvider(
                descriptor.name,
                credentials=settings.sap,
                temperature=descriptor.temperature,
                timeout_s=settings.timeout_s,
            )
        case _:
            assert_never(provider)
