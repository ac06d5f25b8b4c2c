"""Exception hierarchy shared across the scoring toolkit."""

from __future__ import annotations


class RecruitScoreError(Exception):
    """Base error for the toolkit."""


class AnalysisError(RecruitScoreError):
    """Raised when the AI collaborator cannot produce a usable result."""


class BatchAnalysisError(RecruitScoreError):
    """Raised when any analysis in a ranking batch fails.

    No partial ranking is produced; ``failures`` keeps every
    ``(cv_index, exception)`` pair for reporting.
    """

    def __init__(self, failures: list[tuple[int, BaseException]]):
        super().__init__("Candidate analysis batch failed")
        self.failures = failures

    @property
    def failed_indices(self) -> list[int]:
        return [index for index, _ in self.failures]

    def __str__(self) -> str:  # pragma: no cover - trivial
        details = "; ".join(f"cv {index}: {exc}" for index, exc in self.failures)
        return f"Candidate analysis batch failed ({details})"


class InvalidCriteriaError(RecruitScoreError, ValueError):
    """Raised when the active criteria set cannot be used for analysis."""


class DefinitionLoadError(RecruitScoreError, ValueError):
    """Raised when a questionnaire or pipeline document cannot be loaded."""
