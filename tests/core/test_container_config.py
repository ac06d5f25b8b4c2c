from __future__ import annotations

import pytest
from pydantic import ValidationError

from recruitscore.container import create_container
from recruitscore.schemas.config import AppConfig, load_config
from recruitscore.schemas import AnalysisResult, Criterion, CriterionScore


def test_default_container_wires_registry_and_service():
    container = create_container()

    registry = container.assessment_registry()
    service = container.ranking_service()

    assert len(registry.types()) == 3
    assert service._max_workers == service.DEFAULT_MAX_WORKERS


def test_ranking_settings_override_worker_count():
    container = create_container(settings={"ranking": {"max_workers": 7}})

    assert container.ranking_service()._max_workers == 7


def test_scorer_overrides_apply():
    container = create_container(
        settings={
            "scorers": {
                "aggregator": {"match_mode": "normalized"},
                "bigfive": {"high_ratio": 0.9, "low_ratio": 0.1},
                "sjt": {"max_points_per_scenario": 10},
            }
        }
    )

    aggregator = container.aggregator()
    result = AnalysisResult(
        candidate_name="Ana",
        scores=[CriterionScore(criterion_name=" technical ", score=70)],
    )
    candidate = aggregator.build_candidate(
        result, [Criterion(id="c1", name="Technical", weight=3)], candidate_id="x"
    )

    assert candidate.overall_score == 70.0
    assert container.bigfive_scorer().interpret(8, 10) == "moderate"
    assert container.sjt_scorer().display_max(2) == 20


def test_load_config_builds_settings():
    config = load_config(
        {
            "ranking": {"max_workers": 2},
            "scorers": {"aggregator": {"match_mode": "fuzzy", "fuzzy_threshold": 80}},
            "ai": {"endpoint": "http://ai.local", "timeout": 5},
        }
    )

    assert config.to_settings() == {
        "ranking": {"max_workers": 2},
        "scorers": {"aggregator": {"match_mode": "fuzzy", "fuzzy_threshold": 80.0}},
    }
    assert config.ai.endpoint == "http://ai.local"


def test_load_config_defaults_and_errors():
    assert load_config(None).to_settings() == {}
    assert AppConfig().ai.timeout == 30.0

    with pytest.raises(ValueError):
        load_config(["not", "a", "mapping"])
    with pytest.raises(ValidationError):
        load_config({"scorers": {"aggregator": {"match_mode": "phonetic"}}})


@pytest.mark.parametrize(
    "bigfive",
    [{"low_ratio": 0.8, "high_ratio": 0.5}, {"low_ratio": 0.5, "high_ratio": 0.5}, {"low_ratio": 0.7}],
)
def test_load_config_rejects_inverted_bigfive_bands(bigfive):
    with pytest.raises(ValidationError):
        load_config({"scorers": {"bigfive": bigfive}})


def test_load_config_accepts_partial_bigfive_bands():
    config = load_config({"scorers": {"bigfive": {"high_ratio": 0.9}}})

    assert config.to_settings() == {"scorers": {"bigfive": {"high_ratio": 0.9}}}
