from __future__ import annotations

from typing import Any, Optional, Sequence


class LLMError(RuntimeError):
    """Base class for everything the generation layer raises."""


class ConfigurationError(LLMError):
    """Programming or deployment mistake. Not retried."""


class PromptNotFoundError(ConfigurationError):
    def __init__(self, prompt_id: str) -> None:
        super().__init__(f"Prompt not found: {prompt_id}")
        self.prompt_id = prompt_id


class ModelConfigurationError(ConfigurationError):
    """No usable model identifier is configured."""


class ProviderUnavailableError(LLMError):
    """No registered provider reports healthy."""


class ProviderError(LLMError):
    """Raised by a provider when one call fails (transport, timeout, bad payload)."""

    def __init__(self, provider: str, model: str, message: str) -> None:
        super().__init__(f"{provider} failed for model {model}: {message}")
        self.provider = provider
        self.model = model


class InvalidStructuredOutputError(LLMError):
    """Content is not a JSON object, even after repair."""


class GenerationExhaustedError(LLMError):
    """Every candidate model failed."""

    def __init__(
        self,
        model: Optional[str],
        cause: Optional[BaseException],
        attempts: Sequence[Any] = (),
    ) -> None:
        if model is None:
            message = "All models failed"
        else:
            message = f"Model failed: {model} -> {cause}"
        super().__init__(message)
        self.model = model
        self.cause = cause
        self.attempts = tuple(attempts)


__all__ = [
    "LLMError",
    "ConfigurationError",
    "PromptNotFoundError",
    "ModelConfigurationError",
    "ProviderUnavailableError",
    "ProviderError",
    "InvalidStructuredOutputError",
    "GenerationExhaustedError",
]
