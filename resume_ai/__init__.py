"""Generation orchestration for resume features (rewrite, ATS critique, tailoring)."""

from .config import PRESETS, Settings, build_orchestrator
from .llm_interaction import PAYLOADS, GenerationOrchestrator, GenerationResult, hash_key, parse_structured
from .prompt_builders import ContextLine, clamp, format_context, redact_pii

__all__ = [
    "ContextLine",
    "GenerationOrchestrator",
    "GenerationResult",
    "PAYLOADS",
    "PRESETS",
    "Settings",
    "build_orchestrator",
    "clamp",
    "format_context",
    "hash_key",
    "parse_structured",
    "redact_pii",
]
