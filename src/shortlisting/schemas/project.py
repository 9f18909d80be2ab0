from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectRequirements(BaseModel):
    """Project snapshot supplied by the caller."""

    id: str
    title: str
    description: str = ""
    category: str = ""
    subcategory: str | None = None
    skills_required: list[str] = Field(default_factory=list)
    experience_level: str = ""
    team_size: int = 1
    duration_months: int = 1
    requirements: list[str] = Field(default_factory=list)
    deliverables: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True)
