"""
Best-effort cleanup of near-valid JSON from model output.

Only text transforms, nothing is evaluated:
- strip code fences
- normalize smart quotes and non-breaking spaces
- clip to the first balanced {...} block
- drop // line comments outside strings
- remove trailing commas before } or ]
"""

from __future__ import annotations

import re
from typing import Optional

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).replace("```", "")


def normalize_smart_quotes(text: str) -> str:
    return (
        text.replace("\u201c", '"')
        .replace("\u201d", '"')
        .replace("\u2018", "'")
        .replace("\u2019", "'")
        .replace("\u00a0", " ")
    )


def clip_to_balanced_object(text: str) -> Optional[str]:
    """Return the first complete {...} block, or None if it never closes."""
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_str = False
    esc = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_str:
            if esc:
                esc = False
            elif ch == "\\":
                esc = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def strip_line_comments(text: str) -> str:
    out = []
    in_str = False
    esc = False
    i = 0
    while i < len(text):
        ch = text[i]
        if in_str:
            out.append(ch)
            if esc:
                esc = False
            elif ch == "\\":
                esc = True
            elif ch == '"':
                in_str = False
            i += 1
            continue
        if ch == '"':
            in_str = True
        elif ch == "/" and text.startswith("//", i):
            end = text.find("\n", i)
            if end < 0:
                break
            i = end
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def try_repair(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None

    s = strip_code_fences(text.strip())
    s = normalize_smart_quotes(s)

    clipped = clip_to_balanced_object(s)
    if clipped is not None:
        s = clipped

    s = strip_line_comments(s)
    s = remove_trailing_commas(s)
    return s.strip()


__all__ = [
    "try_repair",
    "strip_code_fences",
    "normalize_smart_quotes",
    "clip_to_balanced_object",
    "strip_line_comments",
    "remove_trailing_commas",
]
