"""Situational-judgement competency accumulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import structlog

from ...schemas import AssessmentType, SjtAnswerSet, SjtDefinition, SjtScenario
from ..assessment import AssessmentResult, DimensionScore


@dataclass
class SjtConfig:
    """Display ceiling assumed for each scenario and competency."""

    max_points_per_scenario: int = 5


class SjtScorer:
    """Sum the competency points of the option chosen in each scenario."""

    test_type = AssessmentType.SJT

    def __init__(self, *, config: SjtConfig | None = None) -> None:
        self._config = config or SjtConfig()
        self._logger = structlog.get_logger(__name__)

    def score(
        self,
        answers: Mapping[str, str],
        scenarios: Sequence[SjtScenario],
        competencies: Iterable[str] = (),
    ) -> dict[str, int]:
        totals = {competency: 0 for competency in competencies}
        for scenario in scenarios:
            option_id = answers.get(scenario.id)
            if option_id is None:
                continue
            option = next((item for item in scenario.options if item.id == option_id), None)
            if option is None:
                self._logger.debug(
                    "sjt.stale_selection",
                    scenario_id=scenario.id,
                    option_id=option_id,
                )
                continue
            for competency, points in option.points.items():
                totals[competency] = totals.get(competency, 0) + points
        return totals

    def display_max(self, scenario_count: int) -> int:
        """Assumed per-competency ceiling; not derived from option data."""
        return scenario_count * self._config.max_points_per_scenario

    def evaluate(
        self,
        definition: SjtDefinition,
        answer_set: SjtAnswerSet,
    ) -> AssessmentResult:
        totals = self.score(
            answer_set.answers,
            definition.scenarios,
            definition.competency_ids,
        )
        max_score = self.display_max(len(definition.scenarios))
        details = [
            DimensionScore(
                dimension=competency,
                score=value,
                max_score=max_score,
                percentage=value / max_score * 100 if max_score > 0 else 0.0,
            )
            for competency, value in totals.items()
        ]
        return AssessmentResult(
            test_type=self.test_type,
            scores=totals,
            details=details,
            metadata={
                "scenario_count": len(definition.scenarios),
                "answered_count": sum(
                    1 for scenario in definition.scenarios if scenario.id in answer_set.answers
                ),
                "max_points_per_scenario": self._config.max_points_per_scenario,
            },
        )
