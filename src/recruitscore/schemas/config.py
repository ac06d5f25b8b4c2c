"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from ..core.scorers.bigfive import BigFiveConfig


class RankingConfig(BaseModel):
    max_workers: int | None = Field(default=None, ge=1)


class AggregatorSettings(BaseModel):
    match_mode: Literal["exact", "normalized", "fuzzy"] | None = None
    fuzzy_threshold: float | None = Field(default=None, ge=0, le=100)


class BigFiveSettings(BaseModel):
    high_ratio: float | None = Field(default=None, gt=0, le=1)
    low_ratio: float | None = Field(default=None, ge=0, lt=1)

    @model_validator(mode="after")
    def _ordered_bands(self) -> "BigFiveSettings":
        defaults = BigFiveConfig()
        high = defaults.high_ratio if self.high_ratio is None else self.high_ratio
        low = defaults.low_ratio if self.low_ratio is None else self.low_ratio
        if low >= high:
            raise ValueError(f"low_ratio ({low}) must be below high_ratio ({high})")
        return self


class SjtSettings(BaseModel):
    max_points_per_scenario: int | None = Field(default=None, ge=1)


class ScorerConfig(BaseModel):
    aggregator: AggregatorSettings | None = None
    bigfive: BigFiveSettings | None = None
    sjt: SjtSettings | None = None


class AIConfig(BaseModel):
    endpoint: str | None = None
    api_key: str | None = None
    timeout: float = 30.0


class AppConfig(BaseModel):
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    scorers: ScorerConfig = Field(default_factory=ScorerConfig)
    ai: AIConfig = Field(default_factory=AIConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        ranking = self.ranking.model_dump(exclude_none=True)
        if ranking:
            settings["ranking"] = ranking
        scorer_settings = self.scorers.model_dump(exclude_none=True)
        scorer_settings = {key: value for key, value in scorer_settings.items() if value}
        if scorer_settings:
            settings["scorers"] = scorer_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
