"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveFloat,
    PositiveInt,
    ValidationError,
)


class ReasoningSection(BaseModel):
    base_url: str | None = None
    model: str | None = None
    timeout_s: PositiveFloat | None = None
    max_attempts: PositiveInt | None = None
    backoff_base_s: float | None = Field(default=None, ge=0)


class BatchSection(BaseModel):
    batch_size: PositiveInt | None = None
    batch_delay_s: float | None = Field(default=None, ge=0)


class FallbackSection(BaseModel):
    salt: str | None = None


class KeywordWeightsSection(BaseModel):
    university: NonNegativeInt | None = None
    major: NonNegativeInt | None = None
    location: NonNegativeInt | None = None
    skill: NonNegativeInt | None = None
    interest: NonNegativeInt | None = None
    bio: NonNegativeInt | None = None

    model_config = ConfigDict(extra="forbid")


class KeywordSection(BaseModel):
    weights: KeywordWeightsSection = Field(default_factory=KeywordWeightsSection)


class AppConfig(BaseModel):
    reasoning: ReasoningSection = Field(default_factory=ReasoningSection)
    batch: BatchSection = Field(default_factory=BatchSection)
    fallback: FallbackSection = Field(default_factory=FallbackSection)
    keyword: KeywordSection = Field(default_factory=KeywordSection)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("reasoning", "batch", "fallback"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        weights = self.keyword.weights.model_dump(exclude_none=True)
        if weights:
            settings["keyword"] = weights
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
