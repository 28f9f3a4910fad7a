from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

Role = Literal["system", "user", "assistant"]


class ProviderType(str, Enum):
    """Backend families. Each member needs a registry partition and a factory case."""

    AI_SDK = "ai-sdk"
    SAP_AI_SDK = "sap-ai-sdk"


@dataclass(frozen=True)
class LLMMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class InferenceRequest:
    """One structured inference call."""

    prompt: str
    schema: dict[str, Any]
    system: Optional[str] = None
    temperature: Optional[float] = None
    schema_name: str = "output"

    def messages(self) -> list[LLMMessage]:
        out: list[LLMMessage] = []
        if self.system:
            out.append(LLMMessage(role="system", content=self.system))
        out.append(LLMMessage(role="user", content=self.prompt))
        return out
