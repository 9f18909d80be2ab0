from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CandidateProfile(BaseModel):
    """Applicant snapshot evaluated against a project."""

    id: str
    name: str
    university: str | None = None
    major: str | None = None
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None
    graduation_year: int | None = None
    linkedin: str | None = None
    cover_letter: str | None = None
    motivation: str | None = None
    previous_experience: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True)


class TalentProfile(BaseModel):
    """Searchable student record used by the keyword matcher."""

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
    updated_at: datetime | None = None
    application_count: int = 0

    model_config = ConfigDict(extra="ignore", frozen=True)
