"""Big Five additive Likert scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from ...schemas import AssessmentType, BigFiveAnswerSet, BigFiveDefinition, BigFiveQuestion
from ..assessment import AssessmentResult, DimensionScore


@dataclass
class BigFiveConfig:
    """Proportional interpretation bands and the Likert ceiling."""

    high_ratio: float = 2 / 3
    low_ratio: float = 1 / 3
    points_per_question: int = 5


class BigFiveScorer:
    """Sum Likert answers per dimension.

    Unanswered questions contribute nothing; there is no neutral default.
    Each dimension is judged against its own maximum, so dimensions with
    different question counts are classified consistently.
    """

    test_type = AssessmentType.BIG_FIVE

    def __init__(self, *, config: BigFiveConfig | None = None) -> None:
        self._config = config or BigFiveConfig()

    def score(
        self,
        answers: Mapping[str, int],
        questions: Sequence[BigFiveQuestion],
        dimensions: Sequence[str],
    ) -> dict[str, int]:
        totals = {dimension: 0 for dimension in dimensions}
        for question in questions:
            if question.dimension not in totals:
                continue
            value = answers.get(question.id)
            if value is None:
                continue
            totals[question.dimension] += value
        return totals

    def max_scores(
        self,
        questions: Sequence[BigFiveQuestion],
        dimensions: Sequence[str],
    ) -> dict[str, int]:
        counts = {dimension: 0 for dimension in dimensions}
        for question in questions:
            if question.dimension in counts:
                counts[question.dimension] += 1
        return {
            dimension: count * self._config.points_per_question
            for dimension, count in counts.items()
        }

    def interpret(self, score: int, max_score: int) -> str | None:
        if max_score <= 0:
            return None
        if score > self._config.high_ratio * max_score:
            return "high"
        if score < self._config.low_ratio * max_score:
            return "low"
        return "moderate"

    def evaluate(
        self,
        definition: BigFiveDefinition,
        answer_set: BigFiveAnswerSet,
    ) -> AssessmentResult:
        dimensions = definition.dimension_ids
        totals = self.score(answer_set.answers, definition.questions, dimensions)
        maxima = self.max_scores(definition.questions, dimensions)

        details = [
            DimensionScore(
                dimension=dimension,
                score=totals[dimension],
                max_score=maxima[dimension],
                percentage=_percentage(totals[dimension], maxima[dimension]),
                level=self.interpret(totals[dimension], maxima[dimension]),
            )
            for dimension in dimensions
        ]
        answered = sum(1 for question in definition.questions if question.id in answer_set.answers)
        return AssessmentResult(
            test_type=self.test_type,
            scores=totals,
            details=details,
            metadata={
                "question_count": len(definition.questions),
                "answered_count": answered,
                "high_ratio": self._config.high_ratio,
                "low_ratio": self._config.low_ratio,
            },
        )


def _percentage(score: int, max_score: int) -> float:
    return score / max_score * 100 if max_score > 0 else 0.0
