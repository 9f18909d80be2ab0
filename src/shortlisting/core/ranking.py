"""Rank-and-select over completed evaluations."""

from __future__ import annotations

from typing import Sequence

from ..schemas import AIEvaluationResult, CandidateProfile


def select_top(
    evaluations: Sequence[AIEvaluationResult],
    candidates: Sequence[CandidateProfile],
    max_candidates: int = 10,
) -> tuple[list[CandidateProfile], list[AIEvaluationResult]]:
    """Return the best ``max_candidates`` profiles and evaluations, highest score first.

    ``sorted`` is stable, so equal scores keep their evaluation order.
    """
    if max_candidates < 1:
        raise ValueError("max_candidates must be at least 1")

    ranked = sorted(evaluations, key=lambda evaluation: evaluation.overall_score, reverse=True)
    selected = ranked[:max_candidates]

    by_id: dict[str, CandidateProfile] = {}
    for candidate in candidates:
        by_id.setdefault(candidate.id, candidate)

    profiles: list[CandidateProfile] = []
    for evaluation in selected:
        try:
            profiles.append(by_id[evaluation.candidate_id])
        except KeyError as exc:
            raise KeyError(f"No candidate for evaluation {evaluation.candidate_id!r}") from exc
    return profiles, selected
