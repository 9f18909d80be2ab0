"""Evaluation prompt construction."""

from __future__ import annotations

from typing import Iterable

from ..schemas import CandidateProfile, ProjectRequirements

NOT_SPECIFIED = "Not specified"
NOT_PROVIDED = "Not provided"

_RESPONSE_CONTRACT = """Please provide your evaluation in the following JSON format:
{
  "overallScore": number (0-100),
  "confidence": number (0-100),
  "reasoning": "detailed explanation of the evaluation",
  "strengths": ["strength1", "strength2", "strength3"],
  "concerns": ["concern1", "concern2"],
  "recommendation": "STRONG_FIT" | "GOOD_FIT" | "MODERATE_FIT" | "POOR_FIT",
  "keyInsights": {
    "technicalFit": number (0-100),
    "culturalFit": number (0-100),
    "motivationLevel": number (0-100),
    "growthPotential": number (0-100)
  },
  "suggestedQuestions": ["question1", "question2", "question3"]
}"""

_CRITERIA = (
    "Technical Skills Match",
    "Educational Background Relevance",
    "Experience Level Appropriateness",
    "Motivation and Interest",
    "Communication Skills",
    "Growth Potential",
)


def build_evaluation_prompt(project: ProjectRequirements, candidate: CandidateProfile) -> str:
    """Render the user prompt for one (project, candidate) pair."""

    criteria = "\n".join(f"{idx}. {name} (0-100)" for idx, name in enumerate(_CRITERIA, start=1))
    sections = [
        "You are an expert technical recruiter evaluating candidates for a project position. "
        "Analyze the candidate against the project requirements and provide a comprehensive evaluation.",
        "PROJECT DETAILS:\n" + _render_lines(_project_fields(project)),
        "CANDIDATE PROFILE:\n" + _render_lines(_candidate_fields(candidate)),
        "EVALUATION CRITERIA:\n" + criteria,
        _RESPONSE_CONTRACT,
        "Focus on objective analysis based on the provided information. "
        "Consider both current capabilities and potential for growth.",
    ]
    return "\n\n".join(sections) + "\n"


def _project_fields(project: ProjectRequirements) -> list[tuple[str, str]]:
    return [
        ("Title", _text(project.title, NOT_SPECIFIED)),
        ("Description", _text(project.description, NOT_PROVIDED)),
        ("Category", _text(project.category, NOT_SPECIFIED)),
        ("Subcategory", _text(project.subcategory, NOT_SPECIFIED)),
        ("Experience Level", _text(project.experience_level, NOT_SPECIFIED)),
        ("Duration", f"{project.duration_months} months"),
        ("Team Size", str(project.team_size)),
        ("Required Skills", _joined(project.skills_required, ", ")),
        ("Requirements", _joined(project.requirements, "; ")),
        ("Deliverables", _joined(project.deliverables, "; ")),
    ]


def _candidate_fields(candidate: CandidateProfile) -> list[tuple[str, str]]:
    graduation = str(candidate.graduation_year) if candidate.graduation_year else NOT_SPECIFIED
    return [
        ("Name", _text(candidate.name, NOT_SPECIFIED)),
        ("University", _text(candidate.university, NOT_SPECIFIED)),
        ("Major", _text(candidate.major, NOT_SPECIFIED)),
        ("Graduation Year", graduation),
        ("Skills", _joined(candidate.skills, ", ")),
        ("Previous Experience", _joined(candidate.previous_experience, "; ")),
        ("LinkedIn", _text(candidate.linkedin, NOT_PROVIDED)),
        ("Bio", _text(candidate.bio, NOT_PROVIDED)),
        ("Cover Letter", _text(candidate.cover_letter, NOT_PROVIDED)),
        ("Motivation", _text(candidate.motivation, NOT_PROVIDED)),
    ]


def _render_lines(fields: Iterable[tuple[str, str]]) -> str:
    return "\n".join(f"{label}: {value}" for label, value in fields)


def _text(value: str | None, placeholder: str) -> str:
    if value is None or not value.strip():
        return placeholder
    return value.strip()


def _joined(values: Iterable[str], separator: str) -> str:
    cleaned = [value.strip() for value in values if value and value.strip()]
    return separator.join(cleaned) if cleaned else NOT_SPECIFIED
