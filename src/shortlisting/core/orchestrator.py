"""Batched, bounded-concurrency evaluation of a candidate pool."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

import structlog

from ..schemas import AIEvaluationResult, CandidateProfile, ProjectRequirements
from .evaluator import CandidateEvaluator


@dataclass
class BatchConfig:
    """Batch sizing and pacing."""

    batch_size: int = 5
    batch_delay_s: float = 1.0

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.batch_delay_s < 0:
            raise ValueError("batch_delay_s must be non-negative")


class BatchOrchestrator:
    """Evaluate candidates in fixed-size batches, isolating per-candidate failures."""

    def __init__(
        self,
        *,
        evaluator: CandidateEvaluator,
        config: BatchConfig | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self._evaluator = evaluator
        self._config = config or BatchConfig()
        self._sleep = sleep or asyncio.sleep
        self._logger = structlog.get_logger(__name__)

    async def evaluate_all(
        self,
        project: ProjectRequirements,
        candidates: Sequence[CandidateProfile],
    ) -> list[AIEvaluationResult]:
        """Return one evaluation per candidate, in input order."""
        if not candidates:
            raise ValueError("candidates must not be empty")

        size = self._config.batch_size
        results: list[AIEvaluationResult | None] = [None] * len(candidates)

        for start in range(0, len(candidates), size):
            batch = candidates[start : start + size]
            tasks = [
                asyncio.create_task(self._evaluator.evaluate(project, candidate))
                for candidate in batch
            ]
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)

            fallbacks = 0
            for offset, (candidate, outcome) in enumerate(zip(batch, outcomes)):
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        raise outcome
                    fallbacks += 1
                    self._logger.error(
                        "orchestrator.candidate_failed",
                        candidate_id=candidate.id,
                        error_type=type(outcome).__name__,
                        error=str(outcome),
                    )
                    outcome = self._evaluator.fallback.evaluate(candidate)
                results[start + offset] = outcome

            self._logger.info(
                "orchestrator.batch_complete",
                project_id=project.id,
                batch_start=start,
                batch_size=len(batch),
                recovered=fallbacks,
            )

            if start + size < len(candidates):
                await self._sleep(self._config.batch_delay_s)

        return [result for result in results if result is not None]
