from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from .adapter import GenerationProvider, GenerationRequest, GenerationResult
from .errors import (
    GenerationExhaustedError,
    InvalidStructuredOutputError,
    ModelConfigurationError,
    ProviderUnavailableError,
)
from .model_selector import ModelSelector
from .registry import PromptRegistry, PromptTemplate
from .repair import try_repair

logger = logging.getLogger(__name__)

Repair = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class Attempt:
    """Outcome of one candidate model: a result or the error that ended it."""
    model: str
    result: Optional[GenerationResult] = None
    error: Optional[BaseException] = None
    repaired: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def validate_json_object(text: Optional[str]) -> None:
    if text is None:
        raise InvalidStructuredOutputError("Provider did not return valid JSON: no content")
    try:
        node = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise InvalidStructuredOutputError(f"Provider did not return valid JSON: {exc}") from exc
    if not isinstance(node, dict):
        raise InvalidStructuredOutputError("Expected JSON object at root")


class GenerationOrchestrator:
    """
    Turns (prompt id, variables, model preference) into one generation result.

    Flow per call:
    - render the template once
    - pick the first healthy provider
    - try each candidate model in order; in structured mode validate the
      output and allow one repair pass per model
    - return the first success, or raise GenerationExhaustedError

    Holds no per-call state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        providers: Sequence[GenerationProvider],
        prompts: PromptRegistry,
        selector: ModelSelector,
        *,
        repair: Repair = try_repair,
        verbose: bool = False,
    ) -> None:
        self.providers = tuple(providers)
        self.prompts = prompts
        self.selector = selector
        self.repair = repair
        self.verbose = verbose

    # -------------------------------------------------

    def generate(
        self,
        prompt_id: str,
        variables: Optional[Mapping[str, Any]] = None,
        model_preference: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        expect_structured: bool = False,
        *,
        timeout: Optional[float] = None,
    ) -> GenerationResult:
        template = self.prompts.get(prompt_id)
        prompt = template.render(variables)
        provider = self.select_provider()

        candidates = self.selector.ordered(model_preference)
        if not candidates:
            raise ModelConfigurationError("No candidate models to try.")

        attempts: List[Attempt] = []

        for model in candidates:
            attempt = self._attempt(
                provider, template, prompt, model, options, expect_structured, timeout
            )
            attempts.append(attempt)

            if attempt.ok:
                if self.verbose:
                    logger.info(
                        "[%s] success model=%s latency=%sms repaired=%s",
                        prompt_id,
                        model,
                        attempt.result.latency_ms,
                        attempt.repaired,
                    )
                return attempt.result

            logger.warning(
                "AI attempt failed for model %s. Trying next if available. Cause=%r",
                model,
                attempt.error,
            )

        last = attempts[-1]
        raise GenerationExhaustedError(last.model, last.error, attempts) from last.error

    def select_provider(self) -> GenerationProvider:
        for provider in self.providers:
            if provider.is_healthy():
                return provider
        raise ProviderUnavailableError("No healthy AI provider available")

    def use_prompts(self, prompts: PromptRegistry) -> None:
        # Whole-registry swap; calls already running keep their template.
        self.prompts = prompts

    # -------------------------------------------------

    def _attempt(
        self,
        provider: GenerationProvider,
        template: PromptTemplate,
        prompt: str,
        model: str,
        options: Optional[Mapping[str, Any]],
        expect_structured: bool,
        timeout: Optional[float],
    ) -> Attempt:
        request = GenerationRequest(
            model=model,
            prompt=prompt,
            stream=False,
            format="json" if expect_structured else None,
            meta={"promptId": template.id, "promptVersion": template.version},
        )

        logger.debug(
            "AI generate: provider=%s, promptId=%s, version=%s, tryModel=%s",
            provider.provider_name(),
            template.id,
            template.version,
            model,
        )

        try:
            res = provider.generate(request, options, timeout=timeout)
        except Exception as exc:
            return Attempt(model=model, error=exc)

        content = res.content
        repaired = False
        if expect_structured:
            try:
                validate_json_object(content)
            except InvalidStructuredOutputError as bad:
                content, error = self._repair_once(content, bad)
                if error is not None:
                    return Attempt(model=model, error=error)
                repaired = True

        # model is the candidate we asked for, whatever the provider echoes back
        result = replace(res, content=content, model=model, cached=False)
        return Attempt(model=model, result=result, repaired=repaired)

    def _repair_once(
        self, content: str, bad: InvalidStructuredOutputError
    ) -> Tuple[Optional[str], Optional[InvalidStructuredOutputError]]:
        try:
            fixed = self.repair(content)
        except Exception as exc:
            return None, InvalidStructuredOutputError(f"Repair failed: {exc} (after: {bad})")
        try:
            validate_json_object(fixed)
        except InvalidStructuredOutputError as still_bad:
            return None, still_bad
        return fixed, None


__all__ = ["GenerationOrchestrator", "Attempt", "validate_json_object"]
