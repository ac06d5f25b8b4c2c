"""File-backed key-value store for the candidate profile."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog

from .schemas import CandidateProfile


class ProfileStore:
    """Save and restore the candidate profile across sessions.

    Records live in one JSON object keyed by ``key`` so other entries written
    to the same file survive a save or clear.
    """

    DEFAULT_KEY = "candidateProfile"

    def __init__(self, path: Path, *, key: str = DEFAULT_KEY):
        self._path = path
        self._key = key
        self._logger = structlog.get_logger(__name__)

    def save(self, profile: CandidateProfile) -> None:
        entries = self._read()
        record = profile.model_dump(mode="json", by_alias=True)
        record["savedAt"] = pendulum.now().to_iso8601_string()
        entries[self._key] = record
        self._write(entries)
        self._logger.info("profile.saved", path=str(self._path))

    def load(self) -> CandidateProfile | None:
        record = self._record()
        if record is None:
            return None
        record = {k: v for k, v in record.items() if k != "savedAt"}
        return CandidateProfile.model_validate(record)

    def saved_at(self) -> pendulum.DateTime | None:
        record = self._record()
        if not record or "savedAt" not in record:
            return None
        return pendulum.parse(record["savedAt"])

    def clear(self) -> None:
        entries = self._read()
        if entries.pop(self._key, None) is not None:
            self._write(entries)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid profile store JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Profile store must contain a JSON object")
        return data

    def _record(self) -> dict[str, Any] | None:
        record = self._read().get(self._key)
        if record is not None and not isinstance(record, dict):
            raise ValueError(f"Profile entry {self._key!r} must be a JSON object")
        return record

    def _write(self, entries: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(entries, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
