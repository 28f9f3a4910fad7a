from __future__ import annotations

from typing import Iterable, Optional, Sequence


class LLMError(RuntimeError):
    pass


class LLMConfigError(LLMError):
    """Raised when the configured provider/model pair cannot be served."""


class UnknownProviderError(LLMConfigError):
    def __init__(self, provider: str, valid: Iterable[str]):
        self.provider = provider
        self.valid = list(valid)
        super().__init__(
            f"Unknown LLM provider: {provider}. "
            f"Valid providers are: {', '.join(self.valid)}"
        )


class UnknownModelError(LLMConfigError):
    def __init__(self, provider: str, model: str, valid: Iterable[str]):
        self.provider = provider
        self.model = model
        self.valid = list(valid)
        super().__init__(
            f"Unknown LLM model: {model}. For provider {provider}, "
            f"supported models are: {', '.join(self.valid)}"
        )


class CredentialError(LLMError):
    """Raised when credentials are missing or the token exchange fails."""


class BackendError(LLMError):
    """Raised when the vendor endpoint fails after credentials were accepted."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        self.status_code = status_code
        if status_code is not None:
            message = f"{message} (status {status_code})"
        super().__init__(message)


class SchemaViolationError(LLMError):
    """Raised when the model output cannot be validated against the requested schema."""

    def __init__(
        self, message: str, *, raw_text: str, diagnostics: Sequence[str] = ()
    ):
        self.raw_text = raw_text
        self.diagnostics = list(diagnostics)
        super().__init__(message)
