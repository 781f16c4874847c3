from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import PromptNotFoundError
from .prompt_texts import (
    ATS_CRITIQUE_PROMPT,
    BULLET_REWRITE_PROMPT,
    TAILOR_PATCH_PROMPT,
    TAILOR_SINGLE_PATCH_PROMPT,
)

_PLACEHOLDER = re.compile(r"\{\{([^{}]+)\}\}")


@dataclass(frozen=True)
class PromptTemplate:
    """
    A named, versioned prompt body with {{key}} placeholders.
    """
    id: str
    name: str
    version: str
    body: str

    def render(self, variables: Optional[Mapping[str, Any]] = None) -> str:
        # One regex pass: substituted values are never re-scanned, and
        # placeholders without a value stay literal.
        if not variables:
            return self.body

        def _sub(match: re.Match) -> str:
            key = match.group(1)
            if key in variables:
                return str(variables[key])
            return match.group(0)

        return _PLACEHOLDER.sub(_sub, self.body)

    def placeholders(self) -> List[str]:
        seen: Dict[str, None] = {}
        for match in _PLACEHOLDER.finditer(self.body):
            seen.setdefault(match.group(1), None)
        return list(seen)


class PromptRegistry:
    """
    Read-only lookup of prompt templates by id.
    Reloading means building a new registry (see swapped()), never editing this one.
    """

    def __init__(self, templates: Iterable[PromptTemplate]) -> None:
        table: Dict[str, PromptTemplate] = {}
        for template in templates:
            if template.id in table:
                raise ValueError(f"Duplicate prompt id: {template.id}")
            table[template.id] = template
        self._templates: Mapping[str, PromptTemplate] = MappingProxyType(table)

    def get(self, prompt_id: str) -> PromptTemplate:
        template = self._templates.get(prompt_id)
        if template is None:
            raise PromptNotFoundError(prompt_id)
        return template

    def ids(self) -> List[str]:
        return list(self._templates)

    def all(self) -> Mapping[str, PromptTemplate]:
        return self._templates

    @classmethod
    def swapped(cls, templates: Iterable[PromptTemplate]) -> "PromptRegistry":
        """Build a replacement registry; the receiver is left untouched."""
        return cls(templates)

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)


def build_templates() -> List[PromptTemplate]:

    return [
        PromptTemplate(
            id="bullet_rewrite_json_v1",
            name="Bullet Rewrite JSON",
            version="1.0",
            body=BULLET_REWRITE_PROMPT,
        ),

        PromptTemplate(
            id="ats_critique_json_v1",
            name="ATS Critique JSON",
            version="1.0",
            body=ATS_CRITIQUE_PROMPT,
        ),

        PromptTemplate(
            id="tailor_patch_json_v1",
            name="Tailor Patch JSON",
            version="1.2",
            body=TAILOR_PATCH_PROMPT,
        ),

        PromptTemplate(
            id="tailor_single_patch_json_v1",
            name="Tailor Single Patch JSON",
            version="1.1",
            body=TAILOR_SINGLE_PATCH_PROMPT,
        ),
    ]


_DEFAULT_REGISTRY = PromptRegistry(build_templates())


def default_registry() -> PromptRegistry:
    return _DEFAULT_REGISTRY


__all__ = ["PromptTemplate", "PromptRegistry", "build_templates", "default_registry"]
