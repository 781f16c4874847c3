# tests/conftest.py
# ============================================================
# Shared pytest fixtures for all tests under tests/:
#   - selector: ModelSelector with four distinct defaults A/B/C/D
#   - registry: small PromptRegistry with a free-text and a JSON prompt
#   - make_orchestrator: builds a GenerationOrchestrator around given providers
# No fixture talks to a real Ollama server.
# ============================================================

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest


# ---------- Ensure project root is importable ----------
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from resume_ai.llm_interaction import (  # noqa: E402
    GenerationOrchestrator,
    ModelSelector,
    PromptRegistry,
    PromptTemplate,
)


@pytest.fixture
def selector() -> ModelSelector:
    return ModelSelector(primary="A", secondary="B", fallback="C", tiny="D")


@pytest.fixture
def registry() -> PromptRegistry:
    return PromptRegistry(
        [
            PromptTemplate("greet", "Greeting", "1.0", "Hello {{name}}, job {{jobTitle}}"),
            PromptTemplate("bullets_json", "Bullets JSON", "2.1", 'Return JSON for "{{draft}}"'),
        ]
    )


@pytest.fixture
def make_orchestrator(registry, selector) -> Callable[..., GenerationOrchestrator]:
    def _make(
        providers: Sequence,
        *,
        repair: Optional[Callable[[str], Optional[str]]] = None,
        model_selector: Optional[ModelSelector] = None,
    ) -> GenerationOrchestrator:
        kwargs = {}
        if repair is not None:
            kwargs["repair"] = repair
        return GenerationOrchestrator(
            providers,
            registry,
            model_selector or selector,
            **kwargs,
        )

    return _make
