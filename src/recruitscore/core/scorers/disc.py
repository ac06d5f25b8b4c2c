"""DISC most/least forced-choice tally."""

from __future__ import annotations

from typing import Iterable, Mapping

from ...schemas import AssessmentType, DiscAnswerSet, DiscDefinition, DiscSelection
from ...schemas.assessment import DISC_DIMENSIONS
from ..assessment import AssessmentResult, DimensionScore


class DiscScorer:
    """Add one per "most" pick and subtract one per "least" pick.

    Exclusivity of the two picks within a question is guaranteed by
    :meth:`DiscSelection.select` and is not checked again here.
    """

    test_type = AssessmentType.DISC

    def score(
        self,
        answers: Mapping[str, DiscSelection],
        dimensions: Iterable[str] = DISC_DIMENSIONS,
    ) -> dict[str, int]:
        totals = {dimension: 0 for dimension in dimensions}
        for selection in answers.values():
            if selection.most:
                totals[selection.most] = totals.get(selection.most, 0) + 1
            if selection.least:
                totals[selection.least] = totals.get(selection.least, 0) - 1
        return totals

    def evaluate(
        self,
        definition: DiscDefinition,
        answer_set: DiscAnswerSet,
    ) -> AssessmentResult:
        totals = self.score(answer_set.answers, definition.dimensions)
        # bars are scaled against the largest magnitude, never below one
        scale = max([abs(value) for value in totals.values()] + [1])
        question_count = len(definition.questions)
        details = [
            DimensionScore(
                dimension=dimension,
                score=value,
                max_score=question_count,
                percentage=abs(value) / scale * 100,
            )
            for dimension, value in totals.items()
        ]
        return AssessmentResult(
            test_type=self.test_type,
            scores=totals,
            details=details,
            metadata={
                "question_count": question_count,
                "answered_count": len(answer_set.answers),
                "most_picks": sum(1 for item in answer_set.answers.values() if item.most),
                "least_picks": sum(1 for item in answer_set.answers.values() if item.least),
            },
        )
