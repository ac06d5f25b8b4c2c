"""Criteria, AI analysis results and ranked candidates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Criterion(BaseModel):
    """Named evaluation axis with an importance weight from 1 to 5."""

    id: str
    name: str
    weight: int = Field(ge=1, le=5)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("name")
    @classmethod
    def _reject_blank_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Criterion name must not be blank")
        return value


class CriterionSuggestion(BaseModel):
    """Criterion proposed by the AI; weight is clamped by the consumer."""

    name: str
    weight: float = Field(default=3, allow_inf_nan=False)

    model_config = ConfigDict(extra="ignore")


class CriterionScore(BaseModel):
    """Per-criterion score returned by the AI for one candidate."""

    criterion_name: str
    score: float = Field(ge=0, le=100)
    justification: str = ""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class WorkExperience(BaseModel):
    """Work history entry extracted from a CV."""

    job_title: str = ""
    company: str = ""
    dates: str = ""
    description: str = ""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Education(BaseModel):
    """Education entry extracted from a CV."""

    degree: str = ""
    institution: str = ""
    dates: str = ""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AnalysisResult(BaseModel):
    """Raw AI analysis for one CV."""

    candidate_name: str
    scores: list[CriterionScore] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("scores", "work_experience", "education", "skills", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class Candidate(BaseModel):
    """Ranked candidate derived from one analysis and the active criteria."""

    id: str
    name: str
    overall_score: float
    scores: list[CriterionScore] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
