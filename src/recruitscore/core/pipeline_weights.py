"""Selection pipeline configuration and stage weight validation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from ..schemas import PipelineStage, PipelineTemplate


@dataclass(slots=True)
class WeightValidation:
    """Total enabled weight and whether it amounts to 100%."""

    total_weight: float
    is_valid: bool

    @property
    def total_percent(self) -> int:
        return _round_half_up(self.total_weight * 100)


def validate_stage_weights(stages: Iterable[PipelineStage]) -> WeightValidation:
    """Sum the weights of enabled stages; deviations are only flagged."""
    total = sum(stage.weight for stage in stages if stage.enabled and stage.weight > 0)
    return WeightValidation(
        total_weight=total,
        is_valid=_round_half_up(total * 100) == 100,
    )


class PipelineConfiguration:
    """Recruiter-adjustable copy of a pipeline template."""

    def __init__(self, stages: Iterable[PipelineStage], *, formula: str | None = None) -> None:
        self._stages = list(stages)
        self.formula = formula

    @classmethod
    def from_template(cls, template: PipelineTemplate) -> "PipelineConfiguration":
        return cls(template.stages, formula=template.formula)

    @property
    def stages(self) -> list[PipelineStage]:
        return list(self._stages)

    def enabled_stages(self) -> list[PipelineStage]:
        return [stage for stage in self._stages if stage.enabled]

    def toggle(self, stage_id: str) -> PipelineStage:
        """Flip a stage on or off. Mandatory stages stay enabled."""
        index, stage = self._find(stage_id)
        if stage.mandatory:
            return stage
        updated = stage.model_copy(update={"enabled": not stage.enabled})
        self._stages[index] = updated
        return updated

    def set_enabled(self, stage_id: str, enabled: bool) -> PipelineStage:
        _, stage = self._find(stage_id)
        if bool(stage.enabled) == enabled:
            return stage
        return self.toggle(stage_id)

    def set_weight(self, stage_id: str, weight: float) -> PipelineStage:
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"Stage weight must be within [0, 1], got {weight}")
        index, stage = self._find(stage_id)
        updated = stage.model_copy(update={"weight": weight})
        self._stages[index] = updated
        return updated

    def validate(self) -> WeightValidation:
        return validate_stage_weights(self._stages)

    def _find(self, stage_id: str) -> tuple[int, PipelineStage]:
        for index, stage in enumerate(self._stages):
            if stage.id == stage_id:
                return index, stage
        raise KeyError(f"Unknown stage: {stage_id!r}")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
