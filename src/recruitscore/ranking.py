"""Candidate ranking assembly and execution."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, Sequence

import pendulum
import structlog
import yaml
from pydantic import ValidationError

from . import __version__
from .core import CandidateScoreAggregator, CriterionWeightTable
from .errors import BatchAnalysisError, InvalidCriteriaError
from .llm import AnalysisClient
from .pdf_utils import extract_markdown
from .schemas import AnalysisResult, Candidate, Criterion

CV_SEPARATOR = "---"


def split_cvs(text: str) -> list[str]:
    """Split pasted CVs on the ``---`` separator, dropping blank chunks."""
    return [chunk.strip() for chunk in text.split(CV_SEPARATOR) if chunk.strip()]


class CvLoader:
    """Load CV texts from plain-text files and PDFs."""

    def load(self, paths: Iterable[Path]) -> list[str]:
        cvs: list[str] = []
        for path in paths:
            if path.suffix.lower() == ".pdf":
                text = extract_markdown(path)
                if text:
                    cvs.append(text)
                continue
            cvs.extend(split_cvs(path.read_text(encoding="utf-8")))
        return cvs


class JobLoader:
    """Load a free-text job description."""

    def load(self, path: Path) -> str:
        text = path.read_text(encoding="utf-8").strip()
        if not text:
            raise ValueError(f"Job description is empty: {path}")
        return text


class CriteriaLoader:
    """Load ``{name, weight}`` criteria from YAML or JSON into a table."""

    def load(self, path: Path) -> CriterionWeightTable:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise InvalidCriteriaError(f"Invalid criteria file: {exc}") from exc
        if isinstance(data, dict):
            data = data.get("criteria")
        if not isinstance(data, list):
            raise InvalidCriteriaError("Criteria file must contain a list of criteria")

        table = CriterionWeightTable(criteria=[])
        for entry in data:
            if not isinstance(entry, dict):
                raise InvalidCriteriaError(f"Invalid criterion entry: {entry!r}")
            try:
                table.add(
                    str(entry.get("name", "")),
                    entry.get("weight", CriterionWeightTable.DEFAULT_WEIGHT),
                )
            except ValidationError as exc:
                raise InvalidCriteriaError(f"Invalid criterion {entry!r}: {exc}") from exc
        return table


class OutputWriter:
    """Persist ranking and scoring outputs."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class RankingService:
    """Analyze every CV, then aggregate and rank the whole batch."""

    DEFAULT_MAX_WORKERS = 4

    def __init__(
        self,
        *,
        aggregator: CandidateScoreAggregator,
        client: AnalysisClient | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._client = client
        self._max_workers = max_workers or self.DEFAULT_MAX_WORKERS
        self._logger = structlog.get_logger(__name__)

    def analyze_all(
        self,
        *,
        job_description: str,
        cvs: Sequence[str],
        criteria: Sequence[Criterion],
        locale: str,
        client: AnalysisClient,
    ) -> list[AnalysisResult]:
        """Run one analysis per CV; any failure fails the whole batch."""
        workers = max(1, min(self._max_workers, len(cvs)))
        failures: list[tuple[int, BaseException]] = []
        results: list[AnalysisResult] = []
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(client.analyze, job_description, cv, list(criteria), locale)
                for cv in cvs
            ]
            for index, future in enumerate(futures):
                try:
                    results.append(future.result())
                except Exception as exc:  # noqa: BLE001
                    failures.append((index, exc))

        if failures:
            self._logger.warning(
                "ranking.batch_failed",
                failed=[index for index, _ in failures],
                errors=[str(exc) for _, exc in failures],
            )
            raise BatchAnalysisError(failures) from failures[0][1]
        return results

    def rank(
        self,
        *,
        job_description: str,
        cvs: Sequence[str],
        criteria: Sequence[Criterion],
        locale: str = "en",
        client: AnalysisClient | None = None,
    ) -> list[Candidate]:
        client = client or self._client
        if client is None:
            raise ValueError("An analysis client is required for ranking")
        if not job_description.strip():
            raise ValueError("Job description must not be empty")
        if not cvs:
            raise ValueError("At least one CV is required")
        if not criteria:
            raise InvalidCriteriaError("At least one criterion is required")

        results = self.analyze_all(
            job_description=job_description,
            cvs=cvs,
            criteria=criteria,
            locale=locale,
            client=client,
        )
        candidates = self._aggregator.rank(results, criteria)
        for position, candidate in enumerate(candidates, start=1):
            self._logger.info(
                "ranking.result",
                position=position,
                candidate_id=candidate.id,
                name=candidate.name,
                overall_score=candidate.overall_score,
            )
        return candidates


def build_report(
    candidates: Sequence[Candidate],
    criteria: Sequence[Criterion],
    *,
    locale: str,
) -> dict[str, Any]:
    """Wrap ranked candidates with run metadata."""
    metadata = {
        "candidate_count": len(candidates),
        "locale": locale,
        "criteria": [criterion.model_dump(mode="json") for criterion in criteria],
        "timestamp": pendulum.now().to_iso8601_string(),
        "app_version": __version__,
    }
    return {
        "metadata": metadata,
        "results": [candidate.model_dump(mode="json") for candidate in candidates],
    }
