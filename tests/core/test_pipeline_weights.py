from __future__ import annotations

import pytest

from recruitscore.core import PipelineConfiguration, validate_stage_weights
from recruitscore.schemas import PipelineStage, PipelineTemplate

TEMPLATE = {
    "processo_seletivo": {
        "etapas_disponiveis": [
            {"id": "triagem", "nome": "CV screening", "obrigatorio": True, "peso_score": 0.5},
            {"id": "teste_tecnico", "nome": "Technical test", "peso_score": 0.3},
            {"id": "entrevista", "nome": "Interview", "peso_score": 0.25},
            {"id": "referencias", "nome": "References", "peso_score": 0},
        ],
        "regras_score": {"formula": "sum(weight * score)"},
    }
}


def build_configuration() -> PipelineConfiguration:
    return PipelineConfiguration.from_template(PipelineTemplate.model_validate(TEMPLATE))


def test_template_defaults_enable_weighted_stages():
    configuration = build_configuration()

    enabled = [stage.id for stage in configuration.enabled_stages()]

    assert enabled == ["triagem", "teste_tecnico", "entrevista"]
    assert configuration.formula == "sum(weight * score)"


def test_overweight_pipeline_is_flagged():
    validation = build_configuration().validate()

    assert validation.total_weight == pytest.approx(1.05)
    assert validation.total_percent == 105
    assert validation.is_valid is False


def test_disabling_stage_restores_validity():
    configuration = build_configuration()
    configuration.set_weight("teste_tecnico", 0.5)
    configuration.toggle("entrevista")

    validation = configuration.validate()

    assert validation.total_percent == 100
    assert validation.is_valid is True


def test_mandatory_stage_cannot_be_disabled():
    configuration = build_configuration()

    stage = configuration.toggle("triagem")
    configuration.set_enabled("triagem", False)

    assert stage.enabled is True
    assert configuration.stages[0].enabled is True


def test_mandatory_flag_overrides_explicit_disable():
    stage = PipelineStage(id="triagem", mandatory=True, enabled=False, weight=0.2)

    assert stage.enabled is True


def test_disabled_and_zero_weight_stages_are_excluded():
    stages = [
        PipelineStage(id="a", weight=0.6, enabled=True),
        PipelineStage(id="b", weight=0.4, enabled=False),
        PipelineStage(id="c", weight=0.0, enabled=True),
    ]

    validation = validate_stage_weights(stages)

    assert validation.total_weight == pytest.approx(0.6)
    assert validation.is_valid is False


def test_rounding_tolerates_float_noise():
    stages = [PipelineStage(id=str(index), weight=0.1, enabled=True) for index in range(10)]

    assert validate_stage_weights(stages).is_valid is True


def test_set_weight_rejects_out_of_range():
    configuration = build_configuration()

    with pytest.raises(ValueError):
        configuration.set_weight("entrevista", 1.5)


def test_unknown_stage_raises_key_error():
    with pytest.raises(KeyError):
        build_configuration().toggle("missing")
