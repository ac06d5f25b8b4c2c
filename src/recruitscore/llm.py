"""Helpers for building AI analysis payloads and the HTTP client."""

from __future__ import annotations

import json
from typing import Any, Protocol, Sequence, runtime_checkable
from urllib import request

import structlog
from pydantic import ValidationError

from .errors import AnalysisError
from .schemas import AnalysisResult, Criterion, CriterionSuggestion


@runtime_checkable
class AnalysisClient(Protocol):
    """Scores one CV against the active criteria."""

    def analyze(
        self,
        job_description: str,
        candidate_cv: str,
        criteria: Sequence[Criterion],
        locale: str,
    ) -> AnalysisResult:
        """Return the analysis or raise :class:`AnalysisError`."""


@runtime_checkable
class SuggestionClient(Protocol):
    """Proposes evaluation criteria for a job description."""

    def suggest(self, job_description: str, locale: str) -> list[CriterionSuggestion]:
        """Return suggested criteria; weights may fall outside 1..5."""


def build_analysis_payload(
    *,
    job_description: str,
    candidate_cv: str,
    criteria: Sequence[Criterion],
    locale: str,
) -> dict[str, Any]:
    """Construct payload expected by the external analysis endpoint."""

    return {
        "locale": locale,
        "job_description": job_description,
        "candidate_cv": candidate_cv,
        "criteria": [criterion.name for criterion in criteria],
        "criteria_list": ", ".join(criterion.name for criterion in criteria),
    }


class HTTPAIClient:
    """Simple HTTP client for the analysis and criteria-suggestion API."""

    ANALYZE_PATH = "/analyze"
    SUGGEST_PATH = "/suggest-criteria"

    def __init__(self, endpoint: str, api_key: str | None = None, *, timeout: float = 30.0):
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._logger = structlog.get_logger(__name__)

    def analyze(
        self,
        job_description: str,
        candidate_cv: str,
        criteria: Sequence[Criterion],
        locale: str,
    ) -> AnalysisResult:
        payload = build_analysis_payload(
            job_description=job_description,
            candidate_cv=candidate_cv,
            criteria=criteria,
            locale=locale,
        )
        body = self._post(self.ANALYZE_PATH, payload)
        try:
            return AnalysisResult.model_validate(body)
        except ValidationError as exc:
            self._logger.warning("ai.invalid_analysis", error=str(exc))
            raise AnalysisError("Failed to analyze candidate.") from exc

    def suggest(self, job_description: str, locale: str) -> list[CriterionSuggestion]:
        body = self._post(
            self.SUGGEST_PATH,
            {"locale": locale, "job_description": job_description},
        )
        items = body.get("criteria", []) if isinstance(body, dict) else body
        if not isinstance(items, list):
            raise AnalysisError("Criteria suggestion response must be a list.")
        try:
            return [CriterionSuggestion.model_validate(item) for item in items]
        except ValidationError as exc:
            self._logger.warning("ai.invalid_suggestion", error=str(exc))
            raise AnalysisError("Failed to suggest criteria.") from exc

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        req = request.Request(
            f"{self._endpoint}{path}", data=data, headers=headers, method="POST"
        )
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                raw = resp.read()
        except OSError as exc:
            # URLError, timeouts and connection resets during read
            self._logger.warning("ai.request_failed", path=path, error=str(exc))
            raise AnalysisError(f"AI request to {path} failed: {exc}") from exc

        try:
            body = raw.decode("utf-8")
            return json.loads(body) if body else {}
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            self._logger.warning("ai.invalid_json", path=path, error=str(exc))
            raise AnalysisError(f"AI response from {path} is not valid JSON") from exc
