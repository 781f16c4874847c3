# resume_ai/llm_interaction/__init__.py

"""
1) Registry --------- Which prompts exist
2) Prompt Texts ----- What instructions to give
3) Model Selector --- Which models to try, in which order
4) Adapter ---------- How to talk to a backend
5) Orchestrator ----- How one generation call behaves


registry.py
"Which prompts exist"
PromptTemplate holds id, name, version and a body with {{key}} placeholders.
PromptRegistry is the read-only id -> template table built at import.
Rendering is one pass: unknown placeholders stay literal, substituted
values are never scanned again.


prompt_texts.py
"What instructions we give to the models"
The actual prompt bodies for bullet rewrite, ATS critique and tailoring.


model_selector.py
"Which models to try"
A tier name (primary/secondary/fallback/tiny) or a raw model id goes first,
then the configured defaults in fixed order, without repeats.


adapter.py
"How we talk to backends"
GenerationRequest in, GenerationResult out. OllamaProvider wraps the ollama
SDK and caches its health probe. StaticProvider answers from a script.


orchestrator.py
"How one generation call behaves"
Flow:
-render prompt once
-pick first healthy provider
-for each candidate model: call, validate JSON, repair once
-return first success or raise GenerationExhaustedError


repair.py / fingerprint.py / schemas.py
JSON cleanup used for the single repair pass, cache keys for callers,
and pydantic models for the built-in prompts' JSON.
"""

from .adapter import (
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
    OllamaProvider,
    StaticProvider,
)
from .errors import (
    ConfigurationError,
    GenerationExhaustedError,
    InvalidStructuredOutputError,
    LLMError,
    ModelConfigurationError,
    PromptNotFoundError,
    ProviderError,
    ProviderUnavailableError,
)
from .fingerprint import hash_key
from .model_selector import ModelSelector
from .orchestrator import Attempt, GenerationOrchestrator
from .registry import PromptRegistry, PromptTemplate, default_registry
from .repair import try_repair
from .schemas import PAYLOADS, parse_structured

__all__ = [
    "Attempt",
    "PAYLOADS",
    "ConfigurationError",
    "GenerationExhaustedError",
    "GenerationOrchestrator",
    "GenerationProvider",
    "GenerationRequest",
    "GenerationResult",
    "InvalidStructuredOutputError",
    "LLMError",
    "ModelConfigurationError",
    "ModelSelector",
    "OllamaProvider",
    "PromptNotFoundError",
    "PromptRegistry",
    "PromptTemplate",
    "ProviderError",
    "ProviderUnavailableError",
    "StaticProvider",
    "default_registry",
    "hash_key",
    "parse_structured",
    "try_repair",
]
