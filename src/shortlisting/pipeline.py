"""Shortlisting service assembly, data stores and output helpers."""

from __future__ import annotations

import json
import time
from datetime import timedelta
from pathlib import Path
from typing import Any, Protocol, Sequence, runtime_checkable

import pendulum
import structlog
from pydantic import ValidationError

from .core import BatchOrchestrator, CandidateEvaluator, KeywordMatcher, select_top
from .schemas import (
    AIEvaluationResult,
    CandidateProfile,
    MatchResult,
    ProjectRequirements,
    ShortlistingResponse,
    TalentProfile,
)


class ShortlistingError(LookupError):
    """Base error for request-level shortlist failures."""

    def __init__(self, project_id: str, message: str):
        super().__init__(message)
        self.project_id = project_id


class ProjectNotFound(ShortlistingError):
    def __init__(self, project_id: str):
        super().__init__(project_id, f"Project not found: {project_id!r}")


class NoApplicationsForProject(ShortlistingError):
    def __init__(self, project_id: str):
        super().__init__(project_id, f"No applications found for project {project_id!r}")


@runtime_checkable
class ProjectStore(Protocol):
    """Source of project snapshots."""

    def get_project(self, project_id: str) -> ProjectRequirements | None:
        """Return the project or None when it does not exist."""


@runtime_checkable
class ApplicationStore(Protocol):
    """Source of candidate applications per project."""

    def list_candidates(self, project_id: str) -> list[CandidateProfile]:
        """Return the candidates who applied to the project, in application order."""


class CandidateLoadError(ValueError):
    """Raised when candidate loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[Any]):
        super().__init__("Candidate loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Candidate loading failed: {self.errors}"


class JsonProjectStore:
    """Projects read from a JSON file holding one object or a list of objects."""

    def __init__(self, path: Path):
        self._path = path
        self._projects: dict[str, ProjectRequirements] | None = None

    def get_project(self, project_id: str) -> ProjectRequirements | None:
        if self._projects is None:
            self._projects = self._load()
        return self._projects.get(project_id)

    def _load(self) -> dict[str, ProjectRequirements]:
        with self._path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid project JSON: {exc}") from exc
        records = data if isinstance(data, list) else [data]
        projects: dict[str, ProjectRequirements] = {}
        for record in records:
            project = ProjectRequirements.model_validate(record)
            projects[project.id] = project
        return projects


class JsonlApplicationStore:
    """Applications read from JSONL records of ``{"project_id", "candidate"}``."""

    def __init__(self, path: Path):
        self._path = path

    def list_candidates(self, project_id: str) -> list[CandidateProfile]:
        candidates: list[CandidateProfile] = []
        errors: list[str] = []
        for idx, record in _iter_jsonl(self._path, errors):
            if record.get("project_id") != project_id:
                continue
            try:
                candidates.append(CandidateProfile.model_validate(record.get("candidate")))
            except ValidationError as exc:
                errors.append(f"line {idx}: {exc}")
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


def load_talent_profiles(path: Path) -> list[TalentProfile]:
    """Read keyword-search profiles from a JSONL file."""
    profiles: list[TalentProfile] = []
    errors: list[str] = []
    for idx, record in _iter_jsonl(path, errors):
        try:
            profiles.append(TalentProfile.model_validate(record))
        except ValidationError as exc:
            errors.append(f"line {idx}: {exc}")
    if errors:
        raise CandidateLoadError(errors, profiles)
    return profiles


def _iter_jsonl(path: Path, errors: list[str]):
    with path.open("r", encoding="utf-8") as handle:
        for idx, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                record = json.loads(raw)
            except json.JSONDecodeError as exc:
                errors.append(f"line {idx}: invalid JSON ({exc})")
                continue
            if not isinstance(record, dict):
                errors.append(f"line {idx}: expected a JSON object")
                continue
            yield idx, record


class ShortlistingService:
    """Entry points for AI shortlisting and keyword matching."""

    def __init__(
        self,
        *,
        project_store: ProjectStore,
        application_store: ApplicationStore,
        orchestrator: BatchOrchestrator,
        evaluator: CandidateEvaluator,
        keyword_matcher: KeywordMatcher,
    ) -> None:
        self._projects = project_store
        self._applications = application_store
        self._orchestrator = orchestrator
        self._evaluator = evaluator
        self._matcher = keyword_matcher
        self._logger = structlog.get_logger(__name__)

    async def generate_shortlist(self, project_id: str, max_candidates: int = 10) -> ShortlistingResponse:
        if max_candidates < 1:
            raise ValueError("max_candidates must be at least 1")
        started = time.monotonic()

        project = self._projects.get_project(project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        candidates = self._applications.list_candidates(project_id)
        if not candidates:
            raise NoApplicationsForProject(project_id)

        self._logger.info(
            "shortlist.started",
            project_id=project_id,
            candidates=len(candidates),
            max_candidates=max_candidates,
        )
        with structlog.contextvars.bound_contextvars(project_id=project_id):
            evaluations = await self._orchestrator.evaluate_all(project, candidates)
        profiles, selected = select_top(evaluations, candidates, max_candidates)

        response = ShortlistingResponse(
            total_candidates=len(candidates),
            evaluated_candidates=len(evaluations),
            shortlisted_candidates=profiles,
            evaluations=selected,
            processing_time=timedelta(seconds=time.monotonic() - started),
            ai_model=self._evaluator.model,
            generated_at=pendulum.now("UTC"),
        )
        self._logger.info(
            "shortlist.generated",
            project_id=project_id,
            evaluated=response.evaluated_candidates,
            shortlisted=len(profiles),
            fallback_count=sum(1 for evaluation in evaluations if evaluation.source == "fallback"),
            processing_ms=int(response.processing_time.total_seconds() * 1000),
        )
        return response

    async def evaluate_candidate(
        self,
        project: ProjectRequirements,
        candidate: CandidateProfile,
    ) -> AIEvaluationResult:
        return await self._evaluator.evaluate(project, candidate)

    def match_by_keyword(
        self,
        query: str,
        limit: int,
        candidates: Sequence[TalentProfile],
    ) -> list[MatchResult]:
        return self._matcher.match(query, candidates, limit)


class OutputWriter:
    """Persist rendered results as JSON."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")

    def record_shortlist(self, project_id: str, response: ShortlistingResponse) -> None:
        for rank, evaluation in enumerate(response.evaluations, start=1):
            self.append(
                {
                    "project_id": project_id,
                    "candidate_id": evaluation.candidate_id,
                    "ranking": rank,
                    "ai_model": response.ai_model,
                    "source": evaluation.source,
                    "overall_score": evaluation.overall_score,
                    "confidence": evaluation.confidence,
                    "recommendation": evaluation.recommendation,
                    "generated_at": response.generated_at.isoformat(),
                }
            )
