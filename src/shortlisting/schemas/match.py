from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MatchRating = Literal["excellent", "good", "fair", "poor"]


class MatchedCandidate(BaseModel):
    """Denormalized talent profile with derived activity metrics."""

    id: str
    name: str | None = None
    university: str | None = None
    major: str | None = None
    location: str | None = None
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)
    bio: str | None = None
    graduation_year: int | None = None
    last_active: datetime | None = None
    activity_score: int
    application_count: int
    profile_completeness: int

    model_config = ConfigDict(frozen=True)


class MatchResult(BaseModel):
    """Keyword match for one candidate."""

    candidate: MatchedCandidate
    match_score: int = Field(ge=0, le=100)
    match_reasons: list[str] = Field(default_factory=list)
    keyword_matches: list[str] = Field(default_factory=list)
    rating: MatchRating = "poor"

    model_config = ConfigDict(frozen=True)
