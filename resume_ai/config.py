from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .llm_interaction.adapter import OllamaProvider
from .llm_interaction.model_selector import ModelSelector
from .llm_interaction.orchestrator import GenerationOrchestrator
from .llm_interaction.registry import default_registry


DEFAULT_OLLAMA_BASE = "http://localhost:11434"
DEFAULT_MODELS = {
    "primary": "qwen2.5:3b-instruct",
    "secondary": "gemma2:2b",
    "fallback": "llama3.2:1b",
    "tiny": "tinyllama:1.1b",
}


def _float_env(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    ollama_base: str = DEFAULT_OLLAMA_BASE
    model_primary: str = DEFAULT_MODELS["primary"]
    model_secondary: str = DEFAULT_MODELS["secondary"]
    model_fallback: str = DEFAULT_MODELS["fallback"]
    model_tiny: str = DEFAULT_MODELS["tiny"]
    request_timeout: float = 130.0
    health_timeout: float = 5.0
    health_ttl: float = 30.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            ollama_base=env.get("RESUME_AI_OLLAMA_BASE", DEFAULT_OLLAMA_BASE),
            # set to an empty string to drop a tier
            model_primary=env.get("RESUME_AI_MODEL_PRIMARY", DEFAULT_MODELS["primary"]),
            model_secondary=env.get("RESUME_AI_MODEL_SECONDARY", DEFAULT_MODELS["secondary"]),
            model_fallback=env.get("RESUME_AI_MODEL_FALLBACK", DEFAULT_MODELS["fallback"]),
            model_tiny=env.get("RESUME_AI_MODEL_TINY", DEFAULT_MODELS["tiny"]),
            request_timeout=_float_env(env, "RESUME_AI_REQUEST_TIMEOUT", 130.0),
            health_timeout=_float_env(env, "RESUME_AI_HEALTH_TIMEOUT", 5.0),
            health_ttl=_float_env(env, "RESUME_AI_HEALTH_TTL", 30.0),
        )

    def selector(self) -> ModelSelector:
        return ModelSelector(
            primary=self.model_primary,
            secondary=self.model_secondary,
            fallback=self.model_fallback,
            tiny=self.model_tiny,
        )


@dataclass(frozen=True)
class GenerationPreset:
    temperature: float
    num_predict: int
    top_p: Optional[float] = None

    def as_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "temperature": self.temperature,
            "num_predict": self.num_predict,
        }
        if self.top_p is not None:
            options["top_p"] = self.top_p
        return options


PRESETS: Dict[str, GenerationPreset] = {
    "bullet_rewrite": GenerationPreset(temperature=0.5, num_predict=400),
    "ats_critique": GenerationPreset(temperature=0.3, num_predict=900, top_p=0.9),
    "tailor_patch": GenerationPreset(temperature=0.3, num_predict=900, top_p=0.9),
    "tailor_single_patch": GenerationPreset(temperature=0.22, num_predict=360, top_p=0.9),
}


def build_orchestrator(settings: Optional[Settings] = None, *, verbose: bool = False) -> GenerationOrchestrator:
    settings = settings or Settings.from_env()
    provider = OllamaProvider(
        settings.ollama_base,
        default_model=settings.model_primary,
        request_timeout=settings.request_timeout,
        health_timeout=settings.health_timeout,
        health_ttl=settings.health_ttl,
    )
    return GenerationOrchestrator(
        [provider],
        default_registry(),
        settings.selector(),
        verbose=verbose,
    )


__all__ = ["Settings", "GenerationPreset", "PRESETS", "build_orchestrator"]
