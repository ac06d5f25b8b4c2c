"""Editable set of weighted evaluation criteria."""

from __future__ import annotations

import itertools
from typing import Iterable

from ..errors import InvalidCriteriaError
from ..schemas import Criterion, CriterionSuggestion

DEFAULT_CRITERIA: tuple[tuple[str, int], ...] = (
    ("Technical Skills", 4),
    ("Relevant Experience", 4),
    ("Communication Skills", 3),
)


class CriterionWeightTable:
    """Criteria for one analysis session, kept in display order."""

    MIN_WEIGHT = 1
    MAX_WEIGHT = 5
    DEFAULT_WEIGHT = 3

    def __init__(self, criteria: Iterable[Criterion] | None = None) -> None:
        self._ids = itertools.count(1)
        self._criteria: list[Criterion] = []
        self._criteria = self._defaults() if criteria is None else list(criteria)

    @property
    def criteria(self) -> list[Criterion]:
        return list(self._criteria)

    def __len__(self) -> int:
        return len(self._criteria)

    def add(self, name: str, weight: int = DEFAULT_WEIGHT) -> Criterion:
        criterion = Criterion(id=self._next_id(), name=name, weight=weight)
        self._criteria.append(criterion)
        return criterion

    def update(
        self,
        criterion_id: str,
        *,
        name: str | None = None,
        weight: int | None = None,
    ) -> Criterion:
        index = self._index_of(criterion_id)
        current = self._criteria[index]
        changes = current.model_dump()
        if name is not None:
            changes["name"] = name
        if weight is not None:
            changes["weight"] = weight
        updated = Criterion.model_validate(changes)
        self._criteria[index] = updated
        return updated

    def remove(self, criterion_id: str) -> None:
        del self._criteria[self._index_of(criterion_id)]

    def replace_with_suggestions(
        self,
        suggestions: Iterable[CriterionSuggestion],
    ) -> list[Criterion]:
        """Swap the whole table for AI-suggested criteria."""
        replacement = [
            Criterion(
                id=self._next_id(),
                name=suggestion.name.strip(),
                weight=self.clamp_weight(suggestion.weight),
            )
            for suggestion in suggestions
            if suggestion.name and suggestion.name.strip()
        ]
        self._criteria = replacement
        return self.criteria

    def reset(self) -> None:
        self._ids = itertools.count(1)
        self._criteria = []
        self._criteria = self._defaults()

    def validate(self) -> list[Criterion]:
        if not self._criteria:
            raise InvalidCriteriaError("At least one criterion is required")
        seen: set[str] = set()
        duplicates: list[str] = []
        for criterion in self._criteria:
            if criterion.name in seen:
                duplicates.append(criterion.name)
            seen.add(criterion.name)
        if duplicates:
            raise InvalidCriteriaError(f"Duplicate criterion names: {duplicates}")
        return self.criteria

    @classmethod
    def clamp_weight(cls, value: float) -> int:
        return int(round(max(cls.MIN_WEIGHT, min(cls.MAX_WEIGHT, value))))

    def _defaults(self) -> list[Criterion]:
        return [
            Criterion(id=self._next_id(), name=name, weight=weight)
            for name, weight in DEFAULT_CRITERIA
        ]

    def _next_id(self) -> str:
        taken = {criterion.id for criterion in self._criteria}
        while True:
            candidate_id = f"c{next(self._ids)}"
            if candidate_id not in taken:
                return candidate_id

    def _index_of(self, criterion_id: str) -> int:
        for index, criterion in enumerate(self._criteria):
            if criterion.id == criterion_id:
                return index
        raise KeyError(f"Unknown criterion: {criterion_id!r}")
