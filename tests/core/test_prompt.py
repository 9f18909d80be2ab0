from __future__ import annotations

from typing import Any

from shortlisting.core import build_evaluation_prompt
from shortlisting.schemas import CandidateProfile, ProjectRequirements


def build_project(**kwargs: Any) -> ProjectRequirements:
    defaults: dict[str, Any] = {
        "id": "P-001",
        "title": "Retail analytics dashboard",
        "description": "Build a sales dashboard",
        "category": "Data",
        "skills_required": ["Python", "SQL"],
        "experience_level": "Intermediate",
        "team_size": 3,
        "duration_months": 2,
        "requirements": ["Weekly check-ins"],
        "deliverables": ["Dashboard", "Report"],
    }
    defaults.update(kwargs)
    return ProjectRequirements(**defaults)


def build_candidate(**kwargs: Any) -> CandidateProfile:
    defaults: dict[str, Any] = {"id": "U-001", "name": "Omar Haddad"}
    defaults.update(kwargs)
    return CandidateProfile(**defaults)


def test_prompt_embeds_project_and_candidate():
    candidate = build_candidate(
        university="American University of Dubai",
        skills=["Python", "Tableau"],
        motivation="I love data",
        graduation_year=2026,
    )

    prompt = build_evaluation_prompt(build_project(), candidate)

    assert "Title: Retail analytics dashboard" in prompt
    assert "Required Skills: Python, SQL" in prompt
    assert "Deliverables: Dashboard; Report" in prompt
    assert "Duration: 2 months" in prompt
    assert "University: American University of Dubai" in prompt
    assert "Skills: Python, Tableau" in prompt
    assert "Graduation Year: 2026" in prompt
    assert "Motivation: I love data" in prompt
    assert '"overallScore"' in prompt


def test_prompt_uses_placeholders_for_missing_fields():
    prompt = build_evaluation_prompt(
        build_project(subcategory=None, requirements=[]),
        build_candidate(bio="   "),
    )

    assert "University: Not specified" in prompt
    assert "Major: Not specified" in prompt
    assert "Graduation Year: Not specified" in prompt
    assert "Skills: Not specified" in prompt
    assert "Subcategory: Not specified" in prompt
    assert "Requirements: Not specified" in prompt
    assert "Bio: Not provided" in prompt
    assert "Cover Letter: Not provided" in prompt
    assert "Motivation: Not provided" in prompt
    assert "None" not in prompt


def test_prompt_is_deterministic():
    project = build_project()
    candidate = build_candidate(skills=["Go"])

    assert build_evaluation_prompt(project, candidate) == build_evaluation_prompt(project, candidate)
