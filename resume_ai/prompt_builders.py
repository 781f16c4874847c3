from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional


# -------------------------
# Ranked context lines
# -------------------------

@dataclass(frozen=True)
class ContextLine:
    """One retrieved resume chunk, as shown to the tailoring prompts."""
    rank: int
    section: str
    ref_type: str
    ref_id: Optional[int]
    bullet_index: Optional[int]
    content: str

    def tag(self) -> str:
        ref_id = "null" if self.ref_id is None else self.ref_id
        idx = "null" if self.bullet_index is None else self.bullet_index
        return f"{self.rank}) [{self.section}/{self.ref_type} id={ref_id} idx={idx}]"

    def render(self) -> str:
        return f"{self.tag()} {self.content}"


def rerank(lines: Iterable[ContextLine]) -> List[ContextLine]:
    """Renumber ranks 1..n in the given order."""
    return [replace(line, rank=i) for i, line in enumerate(lines, 1)]


def format_context(lines: Iterable[ContextLine]) -> str:
    return "".join(line.render() + "\n" for line in rerank(lines))


# -------------------------
# Text helpers
# -------------------------

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_PHONE_RE = re.compile(r"\+?\d[\d()\-\s]{6,}\d")
_URL_RE = re.compile(r"https?://\S+")


def clamp(text: Optional[str], limit: int) -> str:
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit]


def redact_pii(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    out = _EMAIL_RE.sub("[EMAIL]", text)
    out = _PHONE_RE.sub("[PHONE]", out)
    return _URL_RE.sub("[URL]", out)


__all__ = ["ContextLine", "rerank", "format_context", "clamp", "redact_pii"]
