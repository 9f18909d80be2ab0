from __future__ import annotations

import pendulum
import pytest

from shortlisting.core import KeywordMatcher, KeywordWeights, extract_terms, summarize_matches
from shortlisting.core.keyword_matcher import profile_completeness, rate_match
from shortlisting.schemas import TalentProfile

NOW = pendulum.datetime(2026, 3, 15, 12, 0, tz="UTC")


def build_matcher(**kwargs) -> KeywordMatcher:
    return KeywordMatcher(now_provider=lambda: NOW, **kwargs)


def build_profile(**overrides) -> TalentProfile:
    data = {"id": "T-1", "name": "Layla Haddad"}
    data.update(overrides)
    return TalentProfile(**data)


def test_extract_terms_drops_short_tokens():
    assert extract_terms("Python developer in Dubai") == ["python", "developer", "dubai"]
    assert extract_terms("AI ML UX") == []


def test_location_and_skill_match():
    matcher = build_matcher()
    candidate = build_profile(location="Dubai", skills=["Python", "React"])

    result = matcher.score("python developer in dubai", candidate)

    assert result.match_score == 35
    assert "Located in Dubai" in result.match_reasons
    assert any("Python" in reason for reason in result.match_reasons if reason.startswith("Skills"))
    assert result.keyword_matches == ["python", "dubai"]
    assert result.rating == "fair"


def test_each_field_contributes_its_weight():
    matcher = build_matcher()
    candidate = build_profile(
        university="American University of Sharjah",
        major="Computer Science",
        bio="I love building data tools",
    )

    assert matcher.score("sharjah", candidate).match_score == 30
    assert matcher.score("computer", candidate).match_score == 25
    assert matcher.score("data", candidate).match_score == 5

    university = matcher.score("sharjah", candidate)
    assert university.match_reasons == ["Studies at American University of Sharjah"]
    major = matcher.score("science", candidate)
    assert major.match_reasons == ["Major: Computer Science"]


def test_university_counts_once_for_several_terms():
    matcher = build_matcher()
    candidate = build_profile(university="American University of Sharjah")

    result = matcher.score("american university sharjah", candidate)

    assert result.match_score == 30
    assert result.keyword_matches == ["american", "university", "sharjah"]


def test_skills_and_interests_score_per_match():
    matcher = build_matcher()
    candidate = build_profile(skills=["Python", "SQL", "Figma"], interests=["robotics", "music"])

    result = matcher.score("python sql robotics music", candidate)

    assert result.match_score == 15 * 2 + 10 * 2
    assert "Skills: Python, SQL" in result.match_reasons
    assert "Interests: robotics, music" in result.match_reasons


def test_bio_bonus_is_flat():
    matcher = build_matcher()
    candidate = build_profile(bio="Passionate about design, research and data science")

    result = matcher.score("design research data", candidate)

    assert result.match_score == 5
    assert result.match_reasons == ["Bio mentions: design, research, data"]


def test_score_is_clamped_to_hundred():
    matcher = build_matcher()
    candidate = build_profile(
        university="Khalifa University",
        major="Robotics Engineering",
        location="Abu Dhabi",
        skills=["python", "ros", "matlab", "c++"],
        interests=["robotics"],
        bio="robotics and python",
    )

    result = matcher.score("khalifa robotics dhabi python ros matlab c++", candidate)

    assert result.match_score == 100
    assert result.rating == "excellent"


def test_no_terms_means_zero_score():
    matcher = build_matcher()

    result = matcher.score("a b", build_profile(location="Dubai"))

    assert result.match_score == 0
    assert result.match_reasons == []
    assert result.keyword_matches == []


def test_custom_weights_apply():
    matcher = build_matcher(weights=KeywordWeights(location=40))

    assert matcher.score("dubai", build_profile(location="Dubai")).match_score == 40


@pytest.mark.parametrize(
    ("updated_at", "applications", "expected"),
    [
        (None, 0, 50),
        (NOW.subtract(days=3), 0, 70),
        (NOW.subtract(days=7), 0, 70),
        (NOW.subtract(days=20), 0, 60),
        (NOW.subtract(days=45), 0, 50),
        (NOW.subtract(days=2), 1, 80),
        (NOW.subtract(days=2), 3, 90),
        (NOW.subtract(days=60), 5, 70),
        (NOW.add(days=1), 0, 70),
    ],
)
def test_activity_score(updated_at, applications, expected):
    matcher = build_matcher()
    candidate = build_profile(updated_at=updated_at, application_count=applications)

    assert matcher.activity_score(candidate) == expected


def test_profile_completeness_counts_filled_fields():
    assert profile_completeness(build_profile()) == 0
    assert profile_completeness(build_profile(university="NYU Abu Dhabi", skills=["Python"])) == 40
    full = build_profile(
        university="NYU Abu Dhabi",
        major="Economics",
        skills=["Excel"],
        bio="Analyst",
        location="Abu Dhabi",
    )
    assert profile_completeness(full) == 100
    assert profile_completeness(build_profile(bio="   ")) == 0


def test_match_result_carries_derived_metrics():
    matcher = build_matcher()
    candidate = build_profile(
        location="Dubai",
        skills=["Python"],
        updated_at=NOW.subtract(days=1),
        application_count=2,
    )

    result = matcher.score("python", candidate)

    assert result.candidate.activity_score == 80
    assert result.candidate.application_count == 2
    assert result.candidate.profile_completeness == 40
    assert result.candidate.last_active == NOW.subtract(days=1)


def test_match_sorts_and_limits():
    matcher = build_matcher()
    candidates = [
        build_profile(id="T-1", location="Dubai"),
        build_profile(id="T-2", location="Dubai", skills=["Python"]),
        build_profile(id="T-3", skills=["Python"]),
        build_profile(id="T-4", university="Dubai Design Institute", skills=["Python"]),
    ]

    results = matcher.match("python dubai", candidates, 3)

    assert [r.candidate.id for r in results] == ["T-4", "T-2", "T-1"]
    assert [r.match_score for r in results] == [45, 35, 20]


def test_match_with_non_positive_limit_returns_nothing():
    matcher = build_matcher()

    assert matcher.match("python", [build_profile(skills=["Python"])], 0) == []


def test_prefilter_keeps_candidates_mentioning_terms():
    matcher = build_matcher()
    candidates = [
        build_profile(id="T-1", location="Dubai"),
        build_profile(id="T-2", goals=["become a python expert"]),
        build_profile(id="T-3", goals=["python"]),
        build_profile(id="T-4", bio="Marketing lead"),
    ]

    kept = matcher.prefilter("python dubai", candidates)

    assert [c.id for c in kept] == ["T-1", "T-3"]
    assert matcher.prefilter("an", candidates) == []


@pytest.mark.parametrize(
    ("score", "rating"),
    [(100, "excellent"), (70, "excellent"), (69, "good"), (50, "good"), (30, "fair"), (29, "poor"), (0, "poor")],
)
def test_rate_match_bands(score, rating):
    assert rate_match(score) == rating


def test_summarize_matches_reports_quality_and_location():
    matcher = build_matcher()
    candidates = [
        build_profile(id="T-1", location="Dubai", skills=["Python"], updated_at=NOW, application_count=1),
        build_profile(id="T-2", location="Dubai", skills=["Python"]),
        build_profile(id="T-3", location="Sharjah", skills=["Python"]),
    ]

    insights = summarize_matches(matcher.match("python", candidates, 10))

    assert insights[0] == "Found 3 candidates matching your search"
    assert insights[1] == "Consider refining your search criteria for better matches"
    assert "1 candidates are highly active on the platform" in insights
    assert insights[-1] == "Most candidates are located in Dubai"


def test_summarize_matches_without_results():
    assert summarize_matches([]) == [
        "No candidates found matching your criteria",
        "Try using broader search terms or different keywords",
    ]


def test_duplicate_skills_differing_in_case_count_once():
    matcher = build_matcher()
    candidate = build_profile(skills=["Python", "python", " PYTHON "], interests=["Music", "music"])

    result = matcher.score("python music", candidate)

    assert result.match_score == 15 + 10
    assert "Skills: Python" in result.match_reasons
    assert "Interests: Music" in result.match_reasons
