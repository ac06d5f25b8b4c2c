"""Assessment results and test-type dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, runtime_checkable

import structlog

from ..schemas import AssessmentType


@dataclass(slots=True)
class DimensionScore:
    """Score for one dimension or competency with its display scaling."""

    dimension: str
    score: int
    max_score: int
    percentage: float
    level: str | None = None


@dataclass(slots=True)
class AssessmentResult:
    """Scored behavioural test."""

    test_type: AssessmentType
    scores: dict[str, int]
    details: list[DimensionScore]
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class AssessmentScorer(Protocol):
    """Scorer contract for one behavioural test type."""

    test_type: AssessmentType

    def evaluate(self, definition: Any, answer_set: Any) -> AssessmentResult:
        """Score ``answer_set`` against the questionnaire ``definition``."""


class AssessmentRegistry:
    """Registry mapping test types to their scorers."""

    def __init__(self, scorers: Iterable[AssessmentScorer]):
        self._scorers = {AssessmentType(scorer.test_type): scorer for scorer in scorers}
        self._logger = structlog.get_logger(__name__)

    def get(self, test_type: AssessmentType | str) -> AssessmentScorer:
        try:
            return self._scorers[AssessmentType(test_type)]
        except (KeyError, ValueError) as exc:
            raise KeyError(f"Unsupported test type: {test_type!r}") from exc

    def types(self) -> list[AssessmentType]:
        return list(self._scorers.keys())

    def score(self, definition: Any, answer_set: Any) -> AssessmentResult:
        if definition.test_type != answer_set.test_type:
            raise ValueError(
                f"Answers for {answer_set.test_type!r} cannot be scored against "
                f"a {definition.test_type!r} definition"
            )
        scorer = self.get(answer_set.test_type)
        result = scorer.evaluate(definition, answer_set)
        self._logger.info(
            "assessment.scored",
            test_type=result.test_type.value,
            scores=result.scores,
        )
        return result
