"""Validation of raw reasoning-service payloads."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..llm import MalformedResponseError
from ..schemas import AIEvaluationResult

_FIELD_MAP: dict[str, str] = {
    "overallScore": "overall_score",
    "confidence": "confidence",
    "reasoning": "reasoning",
    "strengths": "strengths",
    "concerns": "concerns",
    "recommendation": "recommendation",
    "suggestedQuestions": "suggested_questions",
}

_INSIGHT_MAP: dict[str, str] = {
    "technicalFit": "technical_fit",
    "culturalFit": "cultural_fit",
    "motivationLevel": "motivation_level",
    "growthPotential": "growth_potential",
}


def validate_evaluation(candidate_id: str, payload: Mapping[str, Any]) -> AIEvaluationResult:
    """Build an evaluation from a decoded payload, defaulting anything missing.

    Keys are read in the camelCase form requested by the prompt; snake_case
    spellings are accepted as well. Unknown keys are ignored.
    """

    values: dict[str, Any] = {"candidate_id": candidate_id, "source": "ai"}
    for wire_key, field_name in _FIELD_MAP.items():
        value = _lookup(payload, wire_key, field_name)
        if value is not None:
            values[field_name] = value

    raw_insights = _lookup(payload, "keyInsights", "key_insights")
    if isinstance(raw_insights, Mapping):
        insights: dict[str, Any] = {}
        for wire_key, field_name in _INSIGHT_MAP.items():
            value = _lookup(raw_insights, wire_key, field_name)
            if value is not None:
                insights[field_name] = value
        values["key_insights"] = insights

    return AIEvaluationResult.model_validate(values)


def parse_evaluation(candidate_id: str, raw: str | bytes | Mapping[str, Any]) -> AIEvaluationResult:
    """Decode ``raw`` if needed and validate it.

    Raises MalformedResponseError when ``raw`` is not a JSON object.
    """
    if isinstance(raw, Mapping):
        return validate_evaluation(candidate_id, raw)
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"evaluation payload is not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise MalformedResponseError("evaluation payload must be a JSON object")
    return validate_evaluation(candidate_id, decoded)


def _lookup(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None
