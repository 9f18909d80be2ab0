"""Deterministic baseline evaluation used when the reasoning service is unavailable."""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass

from ..schemas import AIEvaluationResult, CandidateProfile, KeyInsights

FALLBACK_REASONING = "Basic evaluation using fallback scoring algorithm"
FALLBACK_CONCERNS: tuple[str, ...] = ("Limited AI analysis available",)
FALLBACK_QUESTIONS: tuple[str, ...] = (
    "Can you tell us about your experience with relevant technologies?",
    "What interests you most about this project?",
    "How do you approach problem-solving in collaborative environments?",
)


@dataclass
class FallbackConfig:
    """Parameters for synthesized evaluations."""

    base_score: float = 50.0
    score_spread: float = 30.0
    good_fit_threshold: int = 70
    confidence: int = 60
    salt: str = ""


class FallbackScorer:
    """Synthesize a plausible evaluation from the candidate profile alone.

    The pseudo-random generator is seeded from the candidate id, so repeated
    runs over the same candidate produce the same result.
    """

    def __init__(self, *, config: FallbackConfig | None = None) -> None:
        self._config = config or FallbackConfig()

    def evaluate(self, candidate: CandidateProfile) -> AIEvaluationResult:
        rng = random.Random(self._seed(candidate.id))
        baseline = self._config.base_score + rng.random() * self._config.score_spread
        overall = _round_half_up(baseline)
        # the tier is derived from the reported score, so 70 stays MODERATE_FIT
        recommendation = "GOOD_FIT" if overall > self._config.good_fit_threshold else "MODERATE_FIT"

        insights = KeyInsights(
            technical_fit=_round_half_up(baseline + rng.random() * 10),
            cultural_fit=_round_half_up(baseline - 5 + rng.random() * 10),
            motivation_level=_round_half_up(baseline + rng.random() * 15),
            growth_potential=_round_half_up(baseline + rng.random() * 20),
        )

        return AIEvaluationResult(
            candidate_id=candidate.id,
            overall_score=overall,
            confidence=self._config.confidence,
            reasoning=FALLBACK_REASONING,
            strengths=list(candidate.skills[:3]),
            concerns=list(FALLBACK_CONCERNS),
            recommendation=recommendation,
            key_insights=insights,
            suggested_questions=list(FALLBACK_QUESTIONS),
            source="fallback",
        )

    def _seed(self, candidate_id: str) -> int:
        digest = hashlib.sha256(f"{self._config.salt}:{candidate_id}".encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big")


def _round_half_up(value: float) -> int:
    return int(value + 0.5)
