"""Weighted multi-criterion candidate scoring and ranking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Literal, Sequence

import pendulum
import structlog
from rapidfuzz import fuzz, utils

from ..schemas import AnalysisResult, Candidate, Criterion, CriterionScore

MatchMode = Literal["exact", "normalized", "fuzzy"]


@dataclass
class AggregatorConfig:
    """Configuration for matching AI score names to criteria."""

    match_mode: MatchMode = "exact"
    fuzzy_threshold: float = 90.0


class CandidateScoreAggregator:
    """Combine per-criterion scores into one weighted overall score.

    Scores whose name matches no criterion, and criteria that received no
    score, are left out of both the numerator and the denominator. When
    nothing matches the overall score is 0.
    """

    def __init__(
        self,
        *,
        config: AggregatorConfig | None = None,
        now_provider: Callable[[], Any] | None = None,
    ) -> None:
        self._config = config or AggregatorConfig()
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    def aggregate(
        self,
        scores: Iterable[CriterionScore],
        criteria: Sequence[Criterion],
    ) -> float:
        total_weighted_score = 0.0
        total_weight = 0
        for scored in scores:
            criterion = self.find_criterion(scored.criterion_name, criteria)
            if criterion is None:
                self._logger.debug(
                    "aggregate.unmatched_criterion",
                    criterion_name=scored.criterion_name,
                )
                continue
            total_weighted_score += scored.score * criterion.weight
            total_weight += criterion.weight

        return total_weighted_score / total_weight if total_weight > 0 else 0.0

    def build_candidate(
        self,
        result: AnalysisResult,
        criteria: Sequence[Criterion],
        *,
        candidate_id: str,
    ) -> Candidate:
        return Candidate(
            id=candidate_id,
            name=result.candidate_name,
            overall_score=self.aggregate(result.scores, criteria),
            scores=list(result.scores),
            work_experience=list(result.work_experience),
            education=list(result.education),
            skills=list(result.skills),
        )

    def rank(
        self,
        results: Sequence[AnalysisResult],
        criteria: Sequence[Criterion],
    ) -> list[Candidate]:
        """Return candidates ordered by overall score, ties in input order."""
        stamp = int(self._now_provider().timestamp() * 1000)
        candidates = [
            self.build_candidate(result, criteria, candidate_id=f"cand-{index}-{stamp}")
            for index, result in enumerate(results)
        ]
        return sorted(candidates, key=lambda item: item.overall_score, reverse=True)

    def find_criterion(
        self,
        name: str,
        criteria: Sequence[Criterion],
    ) -> Criterion | None:
        mode = self._config.match_mode
        if mode == "exact":
            return next((item for item in criteria if item.name == name), None)
        if mode == "normalized":
            wanted = _normalize(name)
            return next((item for item in criteria if _normalize(item.name) == wanted), None)
        if mode == "fuzzy":
            return self._fuzzy_match(name, criteria)
        raise ValueError(f"Unsupported match mode: {mode!r}")

    def _fuzzy_match(
        self,
        name: str,
        criteria: Sequence[Criterion],
    ) -> Criterion | None:
        best: Criterion | None = None
        best_ratio = -1.0
        for criterion in criteria:
            ratio = fuzz.token_sort_ratio(
                name, criterion.name, processor=utils.default_process
            )
            # strict comparison keeps the first declared criterion on ties
            if ratio > best_ratio:
                best, best_ratio = criterion, ratio
        if best is None or best_ratio < self._config.fuzzy_threshold:
            return None
        return best


def _normalize(name: str) -> str:
    return " ".join(name.split()).casefold()
