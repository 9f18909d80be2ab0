"""Dependency injection container for the shortlisting engine."""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping

from dependency_injector import containers, providers

from .core import (
    BatchConfig,
    BatchOrchestrator,
    CandidateEvaluator,
    FallbackConfig,
    FallbackScorer,
    KeywordMatcher,
    KeywordWeights,
)
from .llm import ReasoningClient, ReasoningConfig
from .pipeline import ShortlistingService


class ShortlistingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    reasoning_config = providers.Singleton(ReasoningConfig.from_env)
    reasoning_client = providers.Singleton(ReasoningClient, config=reasoning_config)

    fallback_scorer = providers.Singleton(FallbackScorer)

    candidate_evaluator = providers.Singleton(
        CandidateEvaluator,
        client=reasoning_client,
        fallback=fallback_scorer,
    )

    batch_orchestrator = providers.Singleton(
        BatchOrchestrator,
        evaluator=candidate_evaluator,
    )

    keyword_matcher = providers.Singleton(KeywordMatcher)

    # stores are supplied per call: container.service(project_store=..., application_store=...)
    service = providers.Factory(
        ShortlistingService,
        orchestrator=batch_orchestrator,
        evaluator=candidate_evaluator,
        keyword_matcher=keyword_matcher,
    )


def create_container(
    *,
    settings: dict | None = None,
    environ: Mapping[str, str] | None = None,
) -> ShortlistingContainer:
    """Instantiate container with optional overrides."""

    container = ShortlistingContainer()

    base_reasoning = ReasoningConfig.from_env(environ)
    reasoning_settings = (settings or {}).get("reasoning", {})
    if environ is not None or reasoning_settings:
        container.reasoning_config.override(
            providers.Object(replace(base_reasoning, **reasoning_settings))
        )

    if not settings:
        return container

    if "batch" in settings:
        batch_config = BatchConfig(**settings["batch"])
        container.batch_orchestrator.override(
            providers.Singleton(
                BatchOrchestrator,
                evaluator=container.candidate_evaluator,
                config=batch_config,
            )
        )

    if "fallback" in settings:
        fallback_config = FallbackConfig(**settings["fallback"])
        container.fallback_scorer.override(
            providers.Singleton(FallbackScorer, config=fallback_config)
        )

    if "keyword" in settings:
        weights = KeywordWeights(**settings["keyword"])
        container.keyword_matcher.override(
            providers.Singleton(KeywordMatcher, weights=weights)
        )

    return container
