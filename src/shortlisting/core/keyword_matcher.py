"""Deterministic keyword-weighted candidate matcher."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

import pendulum
import structlog

from ..schemas import MatchedCandidate, MatchResult, TalentProfile
from ..schemas.match import MatchRating

MIN_TERM_LENGTH = 3


@dataclass
class KeywordWeights:
    """Points awarded per matching field."""

    university: int = 30
    major: int = 25
    location: int = 20
    skill: int = 15
    interest: int = 10
    bio: int = 5


@dataclass
class ActivityConfig:
    """Activity score thresholds."""

    baseline: int = 50
    recent_days: int = 7
    recent_bonus: int = 20
    active_days: int = 30
    active_bonus: int = 10
    applied_bonus: int = 10
    frequent_applications: int = 3
    frequent_bonus: int = 10


def extract_terms(query: str) -> list[str]:
    """Lower-case the query, split on whitespace and drop short terms."""
    return [term for term in query.lower().split() if len(term) >= MIN_TERM_LENGTH]


def rate_match(score: int) -> MatchRating:
    if score >= 70:
        return "excellent"
    if score >= 50:
        return "good"
    if score >= 30:
        return "fair"
    return "poor"


class KeywordMatcher:
    """Score talent profiles against a free-text query without calling the LLM."""

    def __init__(
        self,
        *,
        weights: KeywordWeights | None = None,
        activity: ActivityConfig | None = None,
        now_provider: Callable[[], Any] | None = None,
    ) -> None:
        self._weights = weights or KeywordWeights()
        self._activity = activity or ActivityConfig()
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    def prefilter(self, query: str, candidates: Iterable[TalentProfile]) -> list[TalentProfile]:
        """Keep candidates that mention any query term in a searchable field."""
        terms = extract_terms(query)
        if not terms:
            return []
        return [candidate for candidate in candidates if self._mentions_any(candidate, terms)]

    def match(
        self,
        query: str,
        candidates: Sequence[TalentProfile],
        limit: int,
    ) -> list[MatchResult]:
        if limit < 1:
            return []
        terms = extract_terms(query)
        now = self._now()
        results = [self._score(terms, candidate, now) for candidate in candidates]
        results.sort(key=lambda result: result.match_score, reverse=True)
        selected = results[:limit]
        self._logger.info(
            "keyword.matched",
            terms=terms,
            considered=len(candidates),
            returned=len(selected),
        )
        return selected

    def score(self, query: str, candidate: TalentProfile) -> MatchResult:
        return self._score(extract_terms(query), candidate, self._now())

    def _score(self, terms: list[str], candidate: TalentProfile, now: pendulum.DateTime) -> MatchResult:
        weights = self._weights
        total = 0
        reasons: list[str] = []
        matched_terms: set[str] = set()

        for value, points, template in (
            (candidate.university, weights.university, "Studies at {}"),
            (candidate.major, weights.major, "Major: {}"),
            (candidate.location, weights.location, "Located in {}"),
        ):
            hits = _substring_hits(value, terms)
            if hits:
                total += points
                reasons.append(template.format(value))
                matched_terms.update(hits)

        skill_hits = _set_hits(candidate.skills, terms)
        if skill_hits:
            total += weights.skill * len(skill_hits)
            reasons.append("Skills: " + ", ".join(skill_hits))
            matched_terms.update(skill.lower() for skill in skill_hits)

        interest_hits = _set_hits(candidate.interests, terms)
        if interest_hits:
            total += weights.interest * len(interest_hits)
            reasons.append("Interests: " + ", ".join(interest_hits))
            matched_terms.update(interest.lower() for interest in interest_hits)

        bio_hits = _substring_hits(candidate.bio, terms)
        if bio_hits:
            total += weights.bio
            reasons.append("Bio mentions: " + ", ".join(bio_hits))
            matched_terms.update(bio_hits)

        match_score = min(total, 100)
        keyword_matches = [term for term in dict.fromkeys(terms) if term in matched_terms]

        return MatchResult(
            candidate=self._denormalize(candidate, now),
            match_score=match_score,
            match_reasons=reasons,
            keyword_matches=keyword_matches,
            rating=rate_match(match_score),
        )

    def _denormalize(self, candidate: TalentProfile, now: pendulum.DateTime) -> MatchedCandidate:
        return MatchedCandidate(
            id=candidate.id,
            name=candidate.name,
            university=candidate.university,
            major=candidate.major,
            location=candidate.location,
            skills=list(candidate.skills),
            interests=list(candidate.interests),
            goals=list(candidate.goals),
            bio=candidate.bio,
            graduation_year=candidate.graduation_year,
            last_active=candidate.updated_at,
            activity_score=self.activity_score(candidate, now=now),
            application_count=candidate.application_count,
            profile_completeness=profile_completeness(candidate),
        )

    def activity_score(self, candidate: TalentProfile, *, now: pendulum.DateTime | None = None) -> int:
        cfg = self._activity
        score = cfg.baseline
        days = _days_since(candidate.updated_at, now or self._now())
        if days is not None:
            if days <= cfg.recent_days:
                score += cfg.recent_bonus
            elif days <= cfg.active_days:
                score += cfg.active_bonus
        if candidate.application_count >= 1:
            score += cfg.applied_bonus
        if candidate.application_count >= cfg.frequent_applications:
            score += cfg.frequent_bonus
        return min(score, 100)

    def _now(self) -> pendulum.DateTime:
        current = self._now_provider()
        if isinstance(current, pendulum.DateTime):
            return current
        return pendulum.instance(current)

    @staticmethod
    def _mentions_any(candidate: TalentProfile, terms: list[str]) -> bool:
        for text in (candidate.university, candidate.major, candidate.location, candidate.bio):
            if _substring_hits(text, terms):
                return True
        for values in (candidate.skills, candidate.interests, candidate.goals):
            if _set_hits(values, terms):
                return True
        return False


def profile_completeness(candidate: TalentProfile) -> int:
    filled = [
        bool(candidate.university and candidate.university.strip()),
        bool(candidate.major and candidate.major.strip()),
        bool(candidate.skills),
        bool(candidate.bio and candidate.bio.strip()),
        bool(candidate.location and candidate.location.strip()),
    ]
    return min(20 * sum(filled), 100)


def summarize_matches(results: Sequence[MatchResult]) -> list[str]:
    """Human-readable observations about a keyword search result set."""
    if not results:
        return [
            "No candidates found matching your criteria",
            "Try using broader search terms or different keywords",
        ]

    insights = [f"Found {len(results)} candidates matching your search"]
    average = sum(result.match_score for result in results) / len(results)
    if average >= 70:
        insights.append("High quality matches found")
    elif average >= 50:
        insights.append("Good matches found")
    else:
        insights.append("Consider refining your search criteria for better matches")

    active = sum(1 for result in results if result.candidate.activity_score > 60)
    if active:
        insights.append(f"{active} candidates are highly active on the platform")

    locations = Counter(result.candidate.location or "Unknown" for result in results)
    top_location, _ = locations.most_common(1)[0]
    insights.append(f"Most candidates are located in {top_location}")
    return insights


def _substring_hits(value: str | None, terms: Iterable[str]) -> list[str]:
    if not value:
        return []
    haystack = value.lower()
    return [term for term in terms if term in haystack]


def _set_hits(values: Iterable[str], terms: Sequence[str]) -> list[str]:
    wanted = set(terms)
    hits: dict[str, str] = {}
    for value in values:
        key = value.strip().lower() if value else ""
        if key in wanted:
            # first spelling wins for "Python" vs "python"
            hits.setdefault(key, value)
    return list(hits.values())


def _days_since(moment: datetime | None, now: pendulum.DateTime) -> int | None:
    if moment is None:
        return None
    then = moment if isinstance(moment, pendulum.DateTime) else pendulum.instance(moment)
    if then > now:
        return 0
    return now.diff(then).in_days()
