from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple, Union

import httpx
import ollama
from ollama import ResponseError

from .errors import ProviderError

logger = logging.getLogger(__name__)


# =========================
# Request / Result
# =========================

@dataclass(frozen=True)
class GenerationRequest:
    model: str
    prompt: str
    stream: bool = False
    format: Optional[str] = None  # "json" for structured output
    meta: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GenerationResult:
    content: str  # cleaned text or JSON string
    raw: str  # unmodified provider text
    provider: str
    model: str
    latency_ms: int
    cached: bool = False
    provider_meta: Mapping[str, Any] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()


class GenerationProvider(Protocol):
    def generate(
        self,
        request: GenerationRequest,
        options: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> GenerationResult: ...

    def provider_name(self) -> str: ...

    def is_healthy(self) -> bool:
        """Cheap check; must not run a generation call."""
        ...


# =========================
# Health cache
# =========================

class HealthCache:
    """
    Caches the result of a health probe for `ttl` seconds.

    Only one thread probes at a time. While a refresh is running, other
    readers get the previous value instead of waiting; the very first read
    waits because there is nothing to return yet.
    """

    def __init__(self, probe: Callable[[], bool], ttl: float = 30.0) -> None:
        self._probe = probe
        self.ttl = max(0.0, ttl)
        self._state: Tuple[Optional[bool], float] = (None, float("-inf"))
        self._lock = threading.Lock()

    def _fresh(self) -> Optional[bool]:
        value, checked_at = self._state
        if value is not None and time.monotonic() - checked_at < self.ttl:
            return value
        return None

    def get(self) -> bool:
        fresh = self._fresh()
        if fresh is not None:
            return fresh

        stale, _ = self._state
        if not self._lock.acquire(blocking=stale is None):
            return bool(stale)
        try:
            fresh = self._fresh()
            if fresh is not None:
                return fresh
            try:
                ok = bool(self._probe())
            except Exception as exc:
                logger.debug("Health probe failed: %s", exc)
                ok = False
            self._state = (ok, time.monotonic())
            return ok
        finally:
            self._lock.release()

    def invalidate(self) -> None:
        value, _ = self._state
        self._state = (value, float("-inf"))


# =========================
# Ollama
# =========================

class OllamaProvider:
    """
    Talks to an Ollama server through the ollama SDK (/api/generate, /api/tags).
    """

    name = "Ollama"

    def __init__(
        self,
        host: str = "http://localhost:11434",
        *,
        default_model: str = "",
        request_timeout: float = 130.0,
        health_timeout: float = 5.0,
        health_ttl: float = 30.0,
    ) -> None:
        self.host = host
        self.default_model = default_model
        self.request_timeout = request_timeout
        self.health_timeout = health_timeout
        self._clients: Dict[float, ollama.Client] = {}
        self._clients_lock = threading.Lock()
        self._health = HealthCache(self._probe, ttl=health_ttl)

    # -------------------------------------------------

    def provider_name(self) -> str:
        return self.name

    def is_healthy(self) -> bool:
        return self._health.get()

    def generate(
        self,
        request: GenerationRequest,
        options: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> GenerationResult:
        model = request.model if request.model and request.model.strip() else self.default_model
        client = self._client(timeout if timeout is not None else self.request_timeout)

        kwargs: Dict[str, Any] = {
            "model": model,
            "prompt": request.prompt,
            "stream": False,
        }
        if options:
            kwargs["options"] = dict(options)
        if request.format and request.format.strip():
            kwargs["format"] = request.format

        start = time.perf_counter()
        try:
            response = client.generate(**kwargs)
        except ResponseError as exc:
            raise ProviderError(self.name, model, f"HTTP {exc.status_code}: {exc.error}") from exc
        except (httpx.HTTPError, ConnectionError) as exc:
            raise ProviderError(self.name, model, f"{type(exc).__name__}: {exc}") from exc
        latency_ms = int((time.perf_counter() - start) * 1000)

        raw = self._field(response, "response")
        if raw is None:
            raise ProviderError(self.name, model, "response carried no text")
        raw = str(raw)

        meta = {
            key: self._field(response, key)
            for key in ("total_duration", "eval_count", "eval_duration", "prompt_eval_count")
        }

        return GenerationResult(
            content=raw.strip(),
            raw=raw,
            provider=self.name,
            model=model,
            latency_ms=latency_ms,
            cached=False,
            provider_meta=meta,
            warnings=(),
        )

    # -------------------------------------------------

    def _client(self, timeout: float) -> ollama.Client:
        # Only the configured timeouts get a pooled client; one-off values get their own.
        if timeout not in (self.request_timeout, self.health_timeout):
            return ollama.Client(host=self.host, timeout=timeout)
        with self._clients_lock:
            client = self._clients.get(timeout)
            if client is None:
                client = ollama.Client(host=self.host, timeout=timeout)
                self._clients[timeout] = client
            return client

    def _probe(self) -> bool:
        listing = self._client(self.health_timeout).list()
        models = self._field(listing, "models")
        return models is not None

    @staticmethod
    def _field(response: Any, key: str) -> Any:
        if isinstance(response, Mapping):
            return response.get(key)
        return getattr(response, key, None)


# =========================
# Scripted provider
# =========================

Script = Union[str, BaseException, Callable[[GenerationRequest], str]]


class StaticProvider:
    """
    In-process provider that answers from a per-model script.

    A script entry is the text to return, an exception to raise, or a
    callable taking the request. Models without an entry use `default`
    (or fail when it is None). Every request is recorded in `calls`.
    """

    def __init__(
        self,
        responses: Optional[Mapping[str, Script]] = None,
        *,
        default: Optional[Script] = None,
        name: str = "Static",
        healthy: bool = True,
        latency_ms: int = 0,
    ) -> None:
        self.responses = dict(responses or {})
        self.default = default
        self.name = name
        self.healthy = healthy
        self.latency_ms = latency_ms
        self.calls: List[GenerationRequest] = []

    def provider_name(self) -> str:
        return self.name

    def is_healthy(self) -> bool:
        return self.healthy

    def generate(
        self,
        request: GenerationRequest,
        options: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> GenerationResult:
        self.calls.append(request)
        script = self.responses.get(request.model, self.default)

        if script is None:
            raise ProviderError(self.name, request.model, "no scripted response")
        if isinstance(script, BaseException):
            raise script
        text = script(request) if callable(script) else script

        return GenerationResult(
            content=text.strip(),
            raw=text,
            provider=self.name,
            model=request.model,
            latency_ms=self.latency_ms,
            provider_meta={"options": dict(options or {}), "timeout": timeout},
        )


__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "GenerationProvider",
    "HealthCache",
    "OllamaProvider",
    "StaticProvider",
]
