"""Pydantic schema definitions for projects, candidates and evaluations."""

from __future__ import annotations

from .candidate import CandidateProfile, TalentProfile
from .evaluation import (
    AIEvaluationResult,
    KeyInsights,
    RecommendationTier,
    ShortlistingResponse,
)
from .match import MatchedCandidate, MatchResult
from .project import ProjectRequirements

__all__ = [
    "AIEvaluationResult",
    "CandidateProfile",
    "KeyInsights",
    "MatchedCandidate",
    "MatchResult",
    "ProjectRequirements",
    "RecommendationTier",
    "ShortlistingResponse",
    "TalentProfile",
]
