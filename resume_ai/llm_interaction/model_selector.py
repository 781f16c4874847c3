from __future__ import annotations

from typing import Dict, List, Optional

from .errors import ModelConfigurationError

TIERS = ("primary", "secondary", "fallback", "tiny")


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class ModelSelector:
    """
    Maps a caller's model preference onto the ordered list of models to try.

    preference can be:
    - "primary" | "secondary" | "fallback" | "tiny" (any case)
    - a raw model id (e.g. "qwen2.5:3b-instruct")
    - None / "" for the configured order
    """

    def __init__(
        self,
        primary: Optional[str] = None,
        secondary: Optional[str] = None,
        fallback: Optional[str] = None,
        tiny: Optional[str] = None,
    ) -> None:
        self.tiers: Dict[str, Optional[str]] = {
            "primary": primary,
            "secondary": secondary,
            "fallback": fallback,
            "tiny": tiny,
        }
        if all(_blank(model) for model in self.tiers.values()):
            raise ModelConfigurationError(
                "No model configured: primary, secondary, fallback and tiny are all blank."
            )

    def defaults(self) -> List[str]:
        return [model for model in self.tiers.values() if not _blank(model)]

    def ordered(self, preference: Optional[str] = None) -> List[str]:
        # dict keys keep insertion order and drop repeats
        order: Dict[str, None] = {}

        if not _blank(preference):
            tier = preference.strip().lower()
            if tier in self.tiers:
                model = self.tiers[tier]
                if not _blank(model):
                    order[model] = None
            else:
                order[preference] = None

        for model in self.defaults():
            order.setdefault(model, None)

        return list(order)


__all__ = ["ModelSelector", "TIERS"]
