"""Core evaluation, ranking and matching components."""

from __future__ import annotations

from .evaluator import CandidateEvaluator
from .fallback import FallbackConfig, FallbackScorer
from .keyword_matcher import KeywordMatcher, KeywordWeights, extract_terms, summarize_matches
from .orchestrator import BatchConfig, BatchOrchestrator
from .prompt import build_evaluation_prompt
from .ranking import select_top
from .validator import parse_evaluation, validate_evaluation

__all__ = [
    "BatchConfig",
    "BatchOrchestrator",
    "CandidateEvaluator",
    "FallbackConfig",
    "FallbackScorer",
    "KeywordMatcher",
    "KeywordWeights",
    "build_evaluation_prompt",
    "extract_terms",
    "parse_evaluation",
    "select_top",
    "summarize_matches",
    "validate_evaluation",
]
