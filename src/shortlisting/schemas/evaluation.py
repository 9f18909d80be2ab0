"""Evaluation result and shortlist response models."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .candidate import CandidateProfile

RecommendationTier = Literal["STRONG_FIT", "GOOD_FIT", "MODERATE_FIT", "POOR_FIT"]
EvaluationSource = Literal["ai", "fallback"]

RECOMMENDATION_TIERS: tuple[str, ...] = get_args(RecommendationTier)
DEFAULT_RECOMMENDATION: RecommendationTier = "MODERATE_FIT"


def clamp_score(value: Any, default: int) -> int:
    """Coerce an untrusted value into an integer score within [0, 100].

    Missing, boolean, non-numeric and NaN values fall back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    number = max(0.0, min(100.0, number))
    return int(math.floor(number + 0.5))


def coerce_string_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None and str(item).strip()]


class KeyInsights(BaseModel):
    """Sub-scores accompanying an evaluation."""

    technical_fit: int = 50
    cultural_fit: int = 50
    motivation_level: int = 50
    growth_potential: int = 50

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value, 50)


class AIEvaluationResult(BaseModel):
    """Evaluation of a single candidate, either AI-produced or synthesized."""

    candidate_id: str
    overall_score: int = 50
    confidence: int = 70
    reasoning: str = "AI evaluation completed"
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    recommendation: RecommendationTier = DEFAULT_RECOMMENDATION
    key_insights: KeyInsights = Field(default_factory=KeyInsights)
    suggested_questions: list[str] = Field(default_factory=list)
    source: EvaluationSource = "ai"

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp_overall(cls, value: Any) -> int:
        return clamp_score(value, 50)

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> int:
        return clamp_score(value, 70)

    @field_validator("recommendation", mode="before")
    @classmethod
    def _known_tier(cls, value: Any) -> str:
        if isinstance(value, str):
            normalized = value.strip().upper().replace(" ", "_")
            if normalized in RECOMMENDATION_TIERS:
                return normalized
        return DEFAULT_RECOMMENDATION

    @field_validator("strengths", "concerns", "suggested_questions", mode="before")
    @classmethod
    def _string_list(cls, value: Any) -> list[str]:
        return coerce_string_list(value)

    @field_validator("reasoning", mode="before")
    @classmethod
    def _reasoning_text(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return "AI evaluation completed"
        return str(value)

    @field_validator("key_insights", mode="before")
    @classmethod
    def _insights_mapping(cls, value: Any) -> Any:
        if isinstance(value, (dict, KeyInsights)):
            return value
        return {}


class ShortlistingResponse(BaseModel):
    """Outcome of a shortlist request."""

    total_candidates: int
    evaluated_candidates: int
    shortlisted_candidates: list[CandidateProfile]
    evaluations: list[AIEvaluationResult]
    processing_time: timedelta
    ai_model: str
    generated_at: datetime

    model_config = ConfigDict(frozen=True)
