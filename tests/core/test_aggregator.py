from __future__ import annotations

import pendulum
import pytest

from recruitscore.core import AggregatorConfig, CandidateScoreAggregator
from recruitscore.schemas import AnalysisResult, Criterion, CriterionScore


def build_criteria(*pairs: tuple[str, int]) -> list[Criterion]:
    return [
        Criterion(id=f"c{index}", name=name, weight=weight)
        for index, (name, weight) in enumerate(pairs, start=1)
    ]


def build_scores(*pairs: tuple[str, float]) -> list[CriterionScore]:
    return [
        CriterionScore(criterion_name=name, score=score, justification="")
        for name, score in pairs
    ]


def build_result(name: str, *pairs: tuple[str, float]) -> AnalysisResult:
    return AnalysisResult(candidate_name=name, scores=build_scores(*pairs))


def fixed_now() -> pendulum.DateTime:
    return pendulum.datetime(2025, 1, 1)


def test_aggregate_weighted_average():
    aggregator = CandidateScoreAggregator()
    criteria = build_criteria(("Technical", 4), ("Experience", 4), ("Communication", 3))
    scores = build_scores(("Technical", 80), ("Experience", 60), ("Communication", 90))

    overall = aggregator.aggregate(scores, criteria)

    assert overall == pytest.approx(830 / 11)
    assert round(overall, 2) == 75.45


def test_aggregate_excludes_unmatched_on_both_sides():
    aggregator = CandidateScoreAggregator()
    criteria = build_criteria(("Technical", 5), ("Leadership", 1))
    scores = build_scores(("Technical", 70), ("Teamwork", 10))

    assert aggregator.aggregate(scores, criteria) == pytest.approx(70.0)


def test_aggregate_without_matches_is_zero():
    aggregator = CandidateScoreAggregator()
    criteria = build_criteria(("Technical", 5))

    assert aggregator.aggregate(build_scores(("technical", 90)), criteria) == 0.0
    assert aggregator.aggregate([], criteria) == 0.0
    assert aggregator.aggregate(build_scores(("Technical", 90)), []) == 0.0


def test_aggregate_uses_first_matching_criterion():
    aggregator = CandidateScoreAggregator()
    criteria = [
        Criterion(id="a", name="Skills", weight=5),
        Criterion(id="b", name="Skills", weight=1),
        Criterion(id="c", name="Culture", weight=1),
    ]
    scores = build_scores(("Skills", 100), ("Culture", 40))

    assert aggregator.aggregate(scores, criteria) == pytest.approx((100 * 5 + 40) / 6)


@pytest.mark.parametrize(
    "pairs",
    [
        [("A", 10.0), ("B", 95.0), ("C", 50.0)],
        [("A", 0.0), ("B", 100.0)],
        [("C", 33.3)],
    ],
)
def test_aggregate_lies_within_matched_score_bounds(pairs):
    aggregator = CandidateScoreAggregator()
    criteria = build_criteria(("A", 1), ("B", 5), ("C", 3))

    overall = aggregator.aggregate(build_scores(*pairs), criteria)

    values = [score for _, score in pairs]
    assert min(values) <= overall <= max(values)


def test_rank_sorts_descending_and_keeps_ties_in_input_order():
    aggregator = CandidateScoreAggregator(now_provider=fixed_now)
    criteria = build_criteria(("Technical", 3))
    results = [
        build_result("Ana", ("Technical", 70)),
        build_result("Bruno", ("Technical", 90)),
        build_result("Carla", ("Technical", 70)),
        build_result("Davi", ("Unknown", 100)),
    ]

    ranked = aggregator.rank(results, criteria)

    assert [candidate.name for candidate in ranked] == ["Bruno", "Ana", "Carla", "Davi"]
    assert ranked[-1].overall_score == 0.0
    stamp = int(fixed_now().timestamp() * 1000)
    assert ranked[1].id == f"cand-0-{stamp}"
    assert ranked[0].id == f"cand-1-{stamp}"


def test_rank_carries_analysis_details():
    aggregator = CandidateScoreAggregator(now_provider=fixed_now)
    criteria = build_criteria(("Technical", 3))
    result = AnalysisResult.model_validate(
        {
            "candidateName": "Ana",
            "scores": [{"criterionName": "Technical", "score": 88, "justification": "Strong"}],
            "workExperience": [
                {"jobTitle": "Engineer", "company": "Acme", "dates": "2020 - 2024", "description": "APIs"}
            ],
            "education": [{"degree": "BSc", "institution": "USP", "dates": "2016 - 2019"}],
            "skills": ["Python"],
        }
    )

    (candidate,) = aggregator.rank([result], criteria)

    assert candidate.overall_score == pytest.approx(88.0)
    assert candidate.work_experience[0].job_title == "Engineer"
    assert candidate.education[0].institution == "USP"
    assert candidate.skills == ["Python"]
    assert candidate.scores[0].justification == "Strong"


def test_normalized_matching_ignores_case_and_spacing():
    aggregator = CandidateScoreAggregator(config=AggregatorConfig(match_mode="normalized"))
    criteria = build_criteria(("Technical Skills", 4), ("Communication", 2))
    scores = build_scores(("  technical   skills", 80), ("COMMUNICATION", 50))

    assert aggregator.aggregate(scores, criteria) == pytest.approx((80 * 4 + 50 * 2) / 6)


def test_fuzzy_matching_respects_threshold():
    criteria = build_criteria(("Relevant Experience", 4), ("Technical Skills", 2))
    aggregator = CandidateScoreAggregator(
        config=AggregatorConfig(match_mode="fuzzy", fuzzy_threshold=85.0)
    )

    matched = aggregator.find_criterion("Experience Relevant", criteria)
    unmatched = aggregator.find_criterion("Leadership", criteria)

    assert matched is not None and matched.id == "c1"
    assert unmatched is None


def test_unknown_match_mode_is_rejected():
    aggregator = CandidateScoreAggregator(config=AggregatorConfig(match_mode="phonetic"))  # type: ignore[arg-type]

    with pytest.raises(ValueError):
        aggregator.find_criterion("Technical", build_criteria(("Technical", 1)))
