"""Hiring pipeline templates."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class PipelineStage(BaseModel):
    """One configurable selection step with an optional score weight."""

    id: str
    name: str = Field(default="", validation_alias=AliasChoices("name", "nome"))
    kind: str = Field(default="", validation_alias=AliasChoices("kind", "tipo"))
    format: str = Field(default="", validation_alias=AliasChoices("format", "formato"))
    description: str = Field(
        default="", validation_alias=AliasChoices("description", "descricao")
    )
    mandatory: bool = Field(
        default=False, validation_alias=AliasChoices("mandatory", "obrigatorio")
    )
    weight: float = Field(
        default=0.0, ge=0.0, le=1.0, validation_alias=AliasChoices("weight", "peso_score")
    )
    example: str = Field(default="", validation_alias=AliasChoices("example", "exemplo"))
    duration: int = 0
    enabled: bool | None = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="after")
    def _resolve_enabled(self) -> "PipelineStage":
        if self.mandatory:
            self.enabled = True
        elif self.enabled is None:
            self.enabled = self.weight > 0
        return self


class PipelineTemplate(BaseModel):
    """Available stages plus the score formula shown to recruiters."""

    stages: list[PipelineStage] = Field(default_factory=list)
    formula: str | None = None

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "processo_seletivo" not in data:
            return data
        process = data["processo_seletivo"] or {}
        rules = process.get("regras_score") or {}
        return {
            "stages": process.get("etapas_disponiveis", []),
            "formula": rules.get("formula"),
        }
