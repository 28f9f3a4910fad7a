import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

DEFAULT_LLM_PROVIDER = "ai-sdk"
DEFAULT_RESOURCE_GROUP = "default"
DEFAULT_TIMEOUT_SECONDS = 60.0

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "").upper()


def _lookup(environ: Mapping[str, str], name: str) -> str:
    """Read ``name`` from the environment, then from the matching action input.

    GitHub Actions exposes ``with:`` inputs as ``INPUT_<NAME>`` variables.
    """
    value = (environ.get(name) or "").strip()
    if value:
        return value
    return (environ.get(f"INPUT_{name}") or "").strip()


@dataclass(frozen=True)
class SapCredentials:
    """OAuth client credentials and endpoints for SAP AI Core."""

    client_id: str
    client_secret: str
    token_url: str
    base_url: str
    resource_group: str = DEFAULT_RESOURCE_GROUP

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("client_id", "client_secret", "token_url", "base_url")
            if not getattr(self, name)
        ]


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process.

    Built once at startup and passed explicitly into the inference entry point.
    """

    llm_provider: str = DEFAULT_LLM_PROVIDER
    llm_model: str = ""
    llm_api_key: Optional[str] = None
    sap: Optional[SapCredentials] = None
    timeout_s: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        provider = _lookup(env, "LLM_PROVIDER")
        if not provider:
            provider = DEFAULT_LLM_PROVIDER
            # logger imports this module, so resolve it lazily
            from modelgate import logger as log

            log.info(f"Using default LLM_PROVIDER '{provider}'")

        sap = None
        if any(
            env.get(name)
            for name in (
                "SAP_AI_CORE_CLIENT_ID",
                "SAP_AI_CORE_CLIENT_SECRET",
                "SAP_AI_CORE_TOKEN_URL",
                "SAP_AI_CORE_BASE_URL",
            )
        ):
            sap = SapCredentials(
                client_id=env.get("SAP_AI_CORE_CLIENT_ID", ""),
                client_secret=env.get("SAP_AI_CORE_CLIENT_SECRET", ""),
                token_url=env.get("SAP_AI_CORE_TOKEN_URL", ""),
                base_url=env.get("SAP_AI_CORE_BASE_URL", ""),
                resource_group=env.get("SAP_AI_RESOURCE_GROUP")
                or DEFAULT_RESOURCE_GROUP,
            )

        try:
            timeout_s = float(env.get("LLM_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS)
        except ValueError as e:
            raise ValueError(
                f"LLM_TIMEOUT_SECONDS must be a number, got {env.get('LLM_TIMEOUT_SECONDS')!r}"
            ) from e

        return cls(
            llm_provider=provider,
            llm_model=_lookup(env, "LLM_MODEL"),
            llm_api_key=env.get("LLM_API_KEY") or None,
            sap=sap,
            timeout_s=timeout_s,
        )
