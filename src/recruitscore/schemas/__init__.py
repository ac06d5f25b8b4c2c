"""Pydantic schema definitions for criteria, assessments and pipelines."""

from __future__ import annotations

from .assessment import (
    AnswerSet,
    AssessmentDefinition,
    AssessmentType,
    BigFiveAnswerSet,
    BigFiveDefinition,
    BigFiveDimension,
    BigFiveQuestion,
    DiscAnswerSet,
    DiscDefinition,
    DiscQuestion,
    DiscSelection,
    SjtAnswerSet,
    SjtDefinition,
    SjtOption,
    SjtScenario,
)
from .criteria import (
    AnalysisResult,
    Candidate,
    Criterion,
    CriterionScore,
    CriterionSuggestion,
    Education,
    WorkExperience,
)
from .pipeline import PipelineStage, PipelineTemplate
from .profile import CandidateProfile

__all__ = [
    "AnalysisResult",
    "AnswerSet",
    "AssessmentDefinition",
    "AssessmentType",
    "BigFiveAnswerSet",
    "BigFiveDefinition",
    "BigFiveDimension",
    "BigFiveQuestion",
    "Candidate",
    "CandidateProfile",
    "Criterion",
    "CriterionScore",
    "CriterionSuggestion",
    "DiscAnswerSet",
    "DiscDefinition",
    "DiscQuestion",
    "DiscSelection",
    "Education",
    "PipelineStage",
    "PipelineTemplate",
    "SjtAnswerSet",
    "SjtDefinition",
    "SjtOption",
    "SjtScenario",
    "WorkExperience",
]
