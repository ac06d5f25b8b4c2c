"""Questionnaire and pipeline document loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import DefinitionLoadError
from .schemas import (
    AnswerSet,
    AssessmentDefinition,
    AssessmentType,
    BigFiveDefinition,
    DiscDefinition,
    PipelineTemplate,
    SjtDefinition,
)

DEFINITION_MODELS = {
    AssessmentType.BIG_FIVE: BigFiveDefinition,
    AssessmentType.DISC: DiscDefinition,
    AssessmentType.SJT: SjtDefinition,
}

DEFAULT_FILENAMES = {
    AssessmentType.BIG_FIVE: "big_five_questions.json",
    AssessmentType.DISC: "disc_questions.json",
    AssessmentType.SJT: "sjt_scenarios.json",
}

PIPELINE_FILENAME = "modelo_selecao_vaga_ja.json"

_ANSWER_SET_ADAPTER: TypeAdapter[Any] = TypeAdapter(AnswerSet)


def read_json(path: str | Path) -> Any:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise DefinitionLoadError(f"Document not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DefinitionLoadError(f"Invalid JSON in {path}: {exc}") from exc


def load_definition(path: str | Path, test_type: AssessmentType | str) -> AssessmentDefinition:
    """Load a questionnaire document for ``test_type``."""
    model = DEFINITION_MODELS[AssessmentType(test_type)]
    data = read_json(path)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DefinitionLoadError(f"Invalid {AssessmentType(test_type).value} definition: {exc}") from exc


def load_answer_set(path: str | Path, test_type: AssessmentType | str) -> AnswerSet:
    """Load candidate answers; a bare mapping is treated as the answers field."""
    data = read_json(path)
    if isinstance(data, dict) and "answers" not in data:
        data = {"answers": data}
    if not isinstance(data, dict):
        raise DefinitionLoadError("Answers document must be a JSON object")
    data = {**data, "test_type": AssessmentType(test_type).value}
    try:
        return _ANSWER_SET_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise DefinitionLoadError(f"Invalid answers: {exc}") from exc


def load_pipeline_template(path: str | Path) -> PipelineTemplate:
    data = read_json(path)
    try:
        return PipelineTemplate.model_validate(data)
    except ValidationError as exc:
        raise DefinitionLoadError(f"Invalid pipeline template: {exc}") from exc


class DefinitionLibrary:
    """Directory of static test documents, looked up by test type."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def path_for(self, test_type: AssessmentType | str) -> Path:
        return self._base_path / DEFAULT_FILENAMES[AssessmentType(test_type)]

    def load(self, test_type: AssessmentType | str) -> AssessmentDefinition:
        return load_definition(self.path_for(test_type), test_type)

    def load_pipeline(self) -> PipelineTemplate:
        return load_pipeline_template(self._base_path / PIPELINE_FILENAME)


__all__ = [
    "DefinitionLibrary",
    "load_answer_set",
    "load_definition",
    "load_pipeline_template",
    "read_json",
]
