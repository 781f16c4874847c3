from __future__ import annotations

from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .adapter import GenerationResult
from .errors import InvalidStructuredOutputError


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------- bullet_rewrite_json_v1 ----------

class BulletSuggestion(_Payload):
    text: str = ""
    action_verb: Optional[str] = Field(default=None, alias="actionVerb")
    impact: Optional[str] = None
    metric_suggestion: Optional[str] = Field(default=None, alias="metricSuggestion")
    confidence: str = "MED"
    requires_user_input: bool = Field(default=False, alias="requiresUserInput")


class BulletRewrite(_Payload):
    bullets: List[BulletSuggestion] = Field(default_factory=list)


# ---------- ats_critique_json_v1 ----------

class AtsSuggestion(_Payload):
    title: str
    description: str = ""
    before: Optional[str] = None
    after: Optional[str] = None
    benefit: Optional[str] = None


class AtsCritique(_Payload):
    suggestions: List[AtsSuggestion] = Field(default_factory=list)


# ---------- tailor_patch_json_v1 / tailor_single_patch_json_v1 ----------

class BulletPatch(_Payload):
    section: str = "EXPERIENCE"
    entity_id: Optional[int] = Field(default=None, alias="entityId")
    bullet_index: Optional[int] = Field(default=None, alias="bulletIndex")
    original: str = ""
    variants: List[str] = Field(default_factory=list)
    keywords_added: List[str] = Field(default_factory=list, alias="keywordsAdded")
    source_ranks: List[int] = Field(default_factory=list, alias="sourceRanks")


class TailorPlan(_Payload):
    ats_score_before: Optional[int] = Field(default=None, alias="atsScoreBefore", ge=0, le=100)
    ats_score_after: Optional[int] = Field(default=None, alias="atsScoreAfter", ge=0, le=100)
    global_keywords_to_add: List[str] = Field(default_factory=list, alias="globalKeywordsToAdd")
    global_keywords_missing: List[str] = Field(default_factory=list, alias="globalKeywordsMissing")
    bullet_patches: List[BulletPatch] = Field(default_factory=list, alias="bulletPatches")
    section_order_suggested: List[str] = Field(default_factory=list, alias="sectionOrderSuggested")


class SingleTailorPatch(_Payload):
    patch: BulletPatch


PAYLOADS = {
    "bullet_rewrite_json_v1": BulletRewrite,
    "ats_critique_json_v1": AtsCritique,
    "tailor_patch_json_v1": TailorPlan,
    "tailor_single_patch_json_v1": SingleTailorPatch,
}

T = TypeVar("T", bound=BaseModel)


def parse_structured(result: GenerationResult, model_cls: Type[T]) -> T:
    try:
        return model_cls.model_validate_json(result.content)
    except ValidationError as exc:
        raise InvalidStructuredOutputError(
            f"{model_cls.__name__} does not match output of {result.model}: {exc.error_count()} error(s)"
        ) from exc


__all__ = [
    "BulletSuggestion",
    "BulletRewrite",
    "AtsSuggestion",
    "AtsCritique",
    "BulletPatch",
    "TailorPlan",
    "SingleTailorPatch",
    "PAYLOADS",
    "parse_structured",
]
