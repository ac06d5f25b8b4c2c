"""Core scoring engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregator import AggregatorConfig, CandidateScoreAggregator
from .assessment import (
    AssessmentRegistry,
    AssessmentResult,
    AssessmentScorer,
    DimensionScore,
)
from .criteria import CriterionWeightTable
from .pipeline_weights import (
    PipelineConfiguration,
    WeightValidation,
    validate_stage_weights,
)
from .scorers import BigFiveScorer, DiscScorer, SjtScorer

__all__ = [
    "AggregatorConfig",
    "AssessmentRegistry",
    "AssessmentResult",
    "AssessmentScorer",
    "BigFiveScorer",
    "CandidateScoreAggregator",
    "CriterionWeightTable",
    "DimensionScore",
    "DiscScorer",
    "PipelineConfiguration",
    "SjtScorer",
    "WeightValidation",
    "validate_stage_weights",
]
