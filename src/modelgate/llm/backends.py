"""Vendor SDK clients used by the ``ai-sdk`` provider.

Each class is also the backend factory stored on ``SdkModel.backend``:
``OpenAIBackend(api_key, timeout_s)`` builds a ready client. SDKs are imported
on construction so only the vendor actually selected needs to be installed.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from .errors import BackendError, LLMConfigError
from .types import LLMMessage

DEFAULT_MAX_TOKENS = 4096


def _system_text(messages: list[LLMMessage]) -> str:
    return "\n\n".join(m.content for m in messages if m.role == "system")


def _chat_messages(messages: list[LLMMessage]) -> list[dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]


class OpenAIBackend:
    """OpenAI Responses API with json_schema Structured Outputs."""

    def __init__(self, api_key: str, timeout_s: float = 60.0):
        try:
            from openai import OpenAI  # type: ignore
        except ImportError as e:
            raise LLMConfigError(
                "openai SDK not installed. Add dependency 'openai'."
            ) from e

        self._client = OpenAI(api_key=api_key, timeout=timeout_s)

    def _extract_output_text(self, resp: Any) -> str:
        # Newer SDKs expose output_text
        text = getattr(resp, "output_text", None)
        if isinstance(text, str) and text.strip():
            return text.strip()

        # responses: resp.output is a list of items with .content[]
        for item in getattr(resp, "output", []) or []:
            for c in getattr(item, "content", []) or []:
                if getattr(c, "type", None) in ("output_text", "text"):
                    t = getattr(c, "text", None)
                    if isinstance(t, str) and t.strip():
                        return t.strip()

        raise BackendError("Unable to extract text from OpenAI response")

    def generate(
        self,
        *,
        model: str,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str,
        temperature: Optional[float],
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "input": [{"role": m.role, "content": m.content} for m in messages],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": json_schema,
                    # strict mode rejects open-ended objects
                    "strict": False,
                }
            },
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        resp = self._client.responses.create(**kwargs)
        return self._extract_output_text(resp)


class AnthropicBackend:
    """Anthropic Messages API; the schema is offered as a single forced tool."""

    def __init__(self, api_key: str, timeout_s: float = 60.0):
        try:
            from anthropic import Anthropic  # type: ignore
        except ImportError as e:
            raise LLMConfigError(
                "anthropic SDK not installed. Add dependency 'anthropic'."
            ) from e

        self._client = Anthropic(api_key=api_key, timeout=timeout_s)

    def generate(
        self,
        *,
        model: str,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str,
        temperature: Optional[float],
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "messages": _chat_messages(messages),
            "tools": [
                {
                    "name": schema_name,
                    "description": "Respond with JSON matching this schema.",
                    "input_schema": json_schema,
                }
            ],
            "tool_choice": {"type": "tool", "name": schema_name},
        }
        system = _system_text(messages)
        if system:
            kwargs["system"] = system
        if temperature is not None:
            kwargs["temperature"] = temperature

        resp = self._client.messages.create(**kwargs)

        for block in getattr(resp, "content", []) or []:
            if getattr(block, "type", None) == "tool_use":
                return json.dumps(block.input)
        for block in getattr(resp, "content", []) or []:
            if getattr(block, "type", None) == "text":
                return block.text

        raise BackendError("Anthropic response contained no tool_use or text block")


class GoogleBackend:
    """Gemini via google-genai with a JSON response schema."""

    def __init__(self, api_key: str, timeout_s: float = 60.0):
        try:
            from google import genai  # type: ignore
            from google.genai import types as genai_types  # type: ignore
        except ImportError as e:
            raise LLMConfigError(
                "google-genai SDK not installed. Add dependency 'google-genai'."
            ) from e

        self._types = genai_types
        self._client = genai.Client(
            api_key=api_key,
            # milliseconds
            http_options=genai_types.HttpOptions(timeout=int(timeout_s * 1000)),
        )

    def generate(
        self,
        *,
        model: str,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str,
        temperature: Optional[float],
    ) -> str:
        config = self._types.GenerateContentConfig(
            system_instruction=_system_text(messages) or None,
            temperature=temperature,
            response_mime_type="application/json",
            response_json_schema=json_schema,
        )
        contents = "\n\n".join(m["content"] for m in _chat_messages(messages))
        resp = self._client.models.generate_content(
            model=model, contents=contents, config=config
        )

        text = getattr(resp, "text", None)
        if not isinstance(text, str) or not text.strip():
            raise BackendError("Gemini response contained no text")
        return text
