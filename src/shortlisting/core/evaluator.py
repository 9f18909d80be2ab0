"""Single-candidate evaluation chain with fallback substitution."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from ..llm import ReasoningClient, ReasoningClientError
from ..schemas import AIEvaluationResult, CandidateProfile, ProjectRequirements
from .fallback import FallbackScorer
from .prompt import build_evaluation_prompt
from .validator import validate_evaluation


class CandidateEvaluator:
    """Run prompt -> reasoning client -> validator for one candidate."""

    def __init__(
        self,
        *,
        client: ReasoningClient,
        fallback: FallbackScorer | None = None,
    ) -> None:
        self._client = client
        self._fallback = fallback or FallbackScorer()
        self._logger = structlog.get_logger(__name__)

    @property
    def fallback(self) -> FallbackScorer:
        return self._fallback

    @property
    def model(self) -> str:
        return self._client.model

    async def evaluate(
        self,
        project: ProjectRequirements,
        candidate: CandidateProfile,
    ) -> AIEvaluationResult:
        if not self._client.is_configured:
            self._logger.debug("evaluation.fallback", candidate_id=candidate.id, reason="not_configured")
            return self._fallback.evaluate(candidate)

        prompt = build_evaluation_prompt(project, candidate)
        try:
            payload = await self._client.complete_json(prompt)
        except ReasoningClientError as exc:
            self._logger.warning(
                "evaluation.fallback",
                candidate_id=candidate.id,
                project_id=project.id,
                reason=type(exc).__name__,
                error=str(exc),
            )
            return self._fallback.evaluate(candidate)

        try:
            return validate_evaluation(candidate.id, payload)
        except (ValidationError, TypeError) as exc:
            self._logger.warning(
                "evaluation.fallback",
                candidate_id=candidate.id,
                project_id=project.id,
                reason="invalid_payload",
                error=str(exc),
            )
            return self._fallback.evaluate(candidate)
