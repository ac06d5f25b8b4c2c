from __future__ import annotations

import pytest

from recruitscore.core import BigFiveScorer
from recruitscore.core.scorers.bigfive import BigFiveConfig
from recruitscore.schemas import BigFiveAnswerSet, BigFiveDefinition, BigFiveQuestion


def build_definition() -> BigFiveDefinition:
    return BigFiveDefinition.model_validate(
        {
            "teste": {
                "dimensoes": [
                    {"id": "O", "nome": "Openness", "descricao": "Curiosity"},
                    {"id": "C", "nome": "Conscientiousness", "descricao": "Diligence"},
                    {"id": "E", "nome": "Extraversion", "descricao": "Energy"},
                ],
                "perguntas": [
                    {"id": 1, "dimensao": "O", "texto": "Question O1"},
                    {"id": 2, "dimensao": "O", "texto": "Question O2"},
                    {"id": 3, "dimensao": "C", "texto": "Question C1"},
                    {"id": 4, "dimensao": "X", "texto": "Undeclared"},
                ],
            }
        }
    )


def test_score_sums_answers_and_skips_unanswered():
    scorer = BigFiveScorer()
    questions = [
        BigFiveQuestion(id="q1", dimension="O"),
        BigFiveQuestion(id="q2", dimension="O"),
        BigFiveQuestion(id="q3", dimension="C"),
    ]

    totals = scorer.score({"q1": 4, "q3": 2}, questions, ["O", "C", "E", "A", "N"])

    assert totals == {"O": 4, "C": 2, "E": 0, "A": 0, "N": 0}


def test_max_score_is_computed_per_dimension():
    scorer = BigFiveScorer()
    definition = build_definition()

    result = scorer.evaluate(definition, BigFiveAnswerSet(answers={"1": 4, "2": 4, "3": 5, "4": 5}))

    by_dimension = {detail.dimension: detail for detail in result.details}
    assert by_dimension["O"].score == 8
    assert by_dimension["O"].max_score == 10
    assert by_dimension["C"].score == 5
    assert by_dimension["C"].max_score == 5
    assert by_dimension["C"].percentage == pytest.approx(100.0)
    assert "X" not in result.scores


def test_dimension_without_questions_is_defined():
    scorer = BigFiveScorer()

    result = scorer.evaluate(build_definition(), BigFiveAnswerSet(answers={}))

    extraversion = next(detail for detail in result.details if detail.dimension == "E")
    assert extraversion.score == 0
    assert extraversion.max_score == 0
    assert extraversion.percentage == 0.0
    assert extraversion.level is None


@pytest.mark.parametrize(
    ("score", "max_score", "expected"),
    [
        (9, 10, "high"),
        (7, 10, "high"),
        (5, 10, "moderate"),
        (4, 10, "moderate"),
        (3, 10, "low"),
        (81, 120, "high"),
        (39, 120, "low"),
        (4, 5, "high"),
        (1, 5, "low"),
    ],
)
def test_interpretation_bands_scale_with_dimension_max(score, max_score, expected):
    assert BigFiveScorer().interpret(score, max_score) == expected


def test_interpretation_ratios_are_configurable():
    scorer = BigFiveScorer(config=BigFiveConfig(high_ratio=0.9, low_ratio=0.5))

    assert scorer.interpret(8, 10) == "moderate"
    assert scorer.interpret(4, 10) == "low"


def test_metadata_reports_answered_questions():
    result = BigFiveScorer().evaluate(build_definition(), BigFiveAnswerSet(answers={"1": 3}))

    assert result.metadata["question_count"] == 4
    assert result.metadata["answered_count"] == 1
