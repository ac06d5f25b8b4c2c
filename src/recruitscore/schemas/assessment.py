"""Behavioural test definitions and tagged answer sets.

Definitions accept both the English field names and the keys used by the
static questionnaire documents (``teste``, ``perguntas``, ``dimensao``,
``opcoes``, ``pontos`` ...). Answer sets are a discriminated union on
``test_type`` so each one is dispatched to its scorer without inspecting the
shape of the answers.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

DISC_DIMENSIONS: tuple[str, ...] = ("D", "I", "S", "C")
BIG_FIVE_DIMENSIONS: tuple[str, ...] = ("O", "C", "E", "A", "N")

DiscSlot = Literal["most", "least"]


class AssessmentType(str, Enum):
    """Supported behavioural tests."""

    BIG_FIVE = "big-five"
    DISC = "disc"
    SJT = "sjt"


_DEFINITION_CONFIG = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


def _unwrap_test(data: Any, key: str) -> Any:
    """Lift the payload nested under ``teste`` into ``key``."""
    if not isinstance(data, dict) or "teste" not in data:
        return data
    inner = data["teste"]
    unwrapped = {k: v for k, v in data.items() if k != "teste"}
    if isinstance(inner, list):
        unwrapped[key] = inner
    elif isinstance(inner, dict):
        unwrapped.update(inner)
    return unwrapped


class BigFiveDimension(BaseModel):
    id: str
    name: str = Field(default="", validation_alias=AliasChoices("name", "nome"))
    description: str = Field(
        default="", validation_alias=AliasChoices("description", "descricao")
    )

    model_config = _DEFINITION_CONFIG


class BigFiveQuestion(BaseModel):
    id: str
    dimension: str = Field(validation_alias=AliasChoices("dimension", "dimensao"))
    text: str = Field(default="", validation_alias=AliasChoices("text", "texto"))

    model_config = _DEFINITION_CONFIG


class BigFiveDefinition(BaseModel):
    """Likert questionnaire grouped by personality dimension."""

    test_type: Literal["big-five"] = "big-five"
    dimensions: list[BigFiveDimension] = Field(
        default_factory=list, validation_alias=AliasChoices("dimensions", "dimensoes")
    )
    questions: list[BigFiveQuestion] = Field(
        default_factory=list, validation_alias=AliasChoices("questions", "perguntas")
    )

    model_config = _DEFINITION_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        return _unwrap_test(data, "questions")

    @model_validator(mode="after")
    def _default_dimensions(self) -> "BigFiveDefinition":
        if not self.dimensions:
            self.dimensions = [BigFiveDimension(id=dim) for dim in BIG_FIVE_DIMENSIONS]
        return self

    @property
    def dimension_ids(self) -> list[str]:
        return [dimension.id for dimension in self.dimensions]


class DiscQuestion(BaseModel):
    id: str
    options: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("options", "opcoes")
    )

    model_config = _DEFINITION_CONFIG


class DiscDefinition(BaseModel):
    """Forced-choice word groups, one word per DISC dimension."""

    test_type: Literal["disc"] = "disc"
    dimensions: list[str] = Field(default_factory=lambda: list(DISC_DIMENSIONS))
    questions: list[DiscQuestion] = Field(default_factory=list)

    model_config = _DEFINITION_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        return _unwrap_test(data, "questions")


class SjtOption(BaseModel):
    id: str
    text: str = Field(default="", validation_alias=AliasChoices("text", "texto"))
    points: dict[str, int] = Field(
        default_factory=dict, validation_alias=AliasChoices("points", "pontos")
    )

    model_config = _DEFINITION_CONFIG


class SjtScenario(BaseModel):
    id: str
    text: str = Field(default="", validation_alias=AliasChoices("text", "texto"))
    options: list[SjtOption] = Field(
        default_factory=list, validation_alias=AliasChoices("options", "opcoes")
    )

    model_config = _DEFINITION_CONFIG


class SjtDefinition(BaseModel):
    """Situational-judgement scenarios with point-weighted options."""

    test_type: Literal["sjt"] = "sjt"
    competencies: list[str] | None = None
    scenarios: list[SjtScenario] = Field(default_factory=list)

    model_config = _DEFINITION_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        return _unwrap_test(data, "scenarios")

    @property
    def competency_ids(self) -> list[str]:
        """Declared competencies, or every point key in order of appearance."""
        if self.competencies is not None:
            return list(self.competencies)
        seen: dict[str, None] = {}
        for scenario in self.scenarios:
            for option in scenario.options:
                for competency in option.points:
                    seen.setdefault(competency, None)
        return list(seen)


AssessmentDefinition = Annotated[
    Union[BigFiveDefinition, DiscDefinition, SjtDefinition],
    Field(discriminator="test_type"),
]


class BigFiveAnswerSet(BaseModel):
    test_type: Literal["big-five"] = "big-five"
    answers: dict[str, Annotated[int, Field(ge=1, le=5)]] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


class DiscSelection(BaseModel):
    """Most/least picks for one DISC question."""

    most: str | None = None
    least: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _exclusive(self) -> "DiscSelection":
        if self.most is not None and self.most == self.least:
            raise ValueError("'most' and 'least' must reference different dimensions")
        return self

    def select(self, slot: DiscSlot, dimension: str) -> "DiscSelection":
        """Return the selection after clicking ``dimension`` in ``slot``.

        Clicking the current value clears the slot; picking the value held by
        the opposite slot clears that slot.
        """
        picks = {"most": self.most, "least": self.least}
        if picks[slot] == dimension:
            picks[slot] = None
        else:
            picks[slot] = dimension
            other: DiscSlot = "least" if slot == "most" else "most"
            if picks[other] == dimension:
                picks[other] = None
        return DiscSelection(**picks)


class DiscAnswerSet(BaseModel):
    test_type: Literal["disc"] = "disc"
    answers: dict[str, DiscSelection] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    def select(self, question_id: str, slot: DiscSlot, dimension: str) -> DiscSelection:
        current = self.answers.get(question_id, DiscSelection())
        updated = current.select(slot, dimension)
        self.answers[question_id] = updated
        return updated


class SjtAnswerSet(BaseModel):
    test_type: Literal["sjt"] = "sjt"
    answers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


AnswerSet = Annotated[
    Union[BigFiveAnswerSet, DiscAnswerSet, SjtAnswerSet],
    Field(discriminator="test_type"),
]
