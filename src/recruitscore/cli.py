"""Typer CLI entrypoint for ranking and assessment scoring."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional

import pendulum
import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .container import create_container
from .core import CriterionWeightTable, PipelineConfiguration
from .errors import RecruitScoreError
from .library import load_answer_set, load_definition, load_pipeline_template
from .llm import HTTPAIClient
from .logging import configure_logging
from .profile_store import ProfileStore
from .ranking import OutputWriter, build_report
from .schemas import AssessmentType, CandidateProfile
from .schemas.config import AppConfig, load_config

app = typer.Typer(help="Candidate ranking and behavioural assessment CLI.")


@app.callback()
def main_callback(
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    configure_logging(log_level)


@app.command()
def rank(
    job: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job description text file."),
    cvs: List[Path] = typer.Option(
        ...,
        "--cv",
        exists=True,
        readable=True,
        dir_okay=False,
        help="CV file (text with '---' separators, or PDF). Repeatable.",
    ),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    criteria: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="Criteria YAML/JSON path."
    ),
    suggest: bool = typer.Option(False, "--suggest-criteria", help="Replace criteria with AI suggestions."),
    locale: str = typer.Option("en", help="Locale passed to the AI collaborator."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    ai_endpoint: Optional[str] = typer.Option(None, help="AI analysis API endpoint."),
    ai_api_key: Optional[str] = typer.Option(None, help="AI analysis API key."),
) -> None:
    """Analyze CVs against weighted criteria and write a ranked list."""
    app_config = _load_app_config(config)
    container = create_container(settings=app_config.to_settings())
    client = _build_client(app_config, ai_endpoint, ai_api_key)

    try:
        job_description = container.job_loader().load(job)
        cv_texts = container.cv_loader().load(cvs)
        table = container.criteria_loader().load(criteria) if criteria else CriterionWeightTable()
        if suggest:
            table.replace_with_suggestions(client.suggest(job_description, locale))
        active_criteria = table.validate()

        candidates = container.ranking_service().rank(
            job_description=job_description,
            cvs=cv_texts,
            criteria=active_criteria,
            locale=locale,
            client=client,
        )
    except (RecruitScoreError, ValueError) as exc:
        typer.echo(f"Ranking failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    container.writer().write(output, build_report(candidates, active_criteria, locale=locale))
    typer.echo(f"Ranked {len(candidates)} candidates. Results saved to {output}.")


@app.command("suggest-criteria")
def suggest_criteria(
    job: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job description text file."),
    locale: str = typer.Option("en", help="Locale passed to the AI collaborator."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Write criteria YAML here."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    ai_endpoint: Optional[str] = typer.Option(None, help="AI suggestion API endpoint."),
    ai_api_key: Optional[str] = typer.Option(None, help="AI suggestion API key."),
) -> None:
    """Ask the AI for criteria and print them with weights clamped to 1..5."""
    app_config = _load_app_config(config)
    client = _build_client(app_config, ai_endpoint, ai_api_key)
    container = create_container(settings=app_config.to_settings())

    try:
        job_description = container.job_loader().load(job)
        table = CriterionWeightTable(criteria=[])
        suggested = table.replace_with_suggestions(client.suggest(job_description, locale))
    except (RecruitScoreError, ValueError) as exc:
        typer.echo(f"Suggestion failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    document = {"criteria": [{"name": item.name, "weight": item.weight} for item in suggested]}
    rendered = yaml.safe_dump(document, allow_unicode=True, sort_keys=False)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        typer.echo(f"Saved {len(suggested)} criteria to {output}.")
    else:
        typer.echo(rendered)


@app.command("score-test")
def score_test(
    test_type: AssessmentType = typer.Option(..., "--type", help="Behavioural test type."),
    definition: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Test definition JSON."),
    answers: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidate answers JSON."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Output JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """Score Big Five, DISC or SJT answers locally."""
    app_config = _load_app_config(config)
    container = create_container(settings=app_config.to_settings())

    try:
        test_definition = load_definition(definition, test_type)
        answer_set = load_answer_set(answers, test_type)
        result = container.assessment_registry().score(test_definition, answer_set)
    except (RecruitScoreError, ValueError) as exc:
        typer.echo(f"Scoring failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    payload = _with_metadata(asdict(result))
    if output:
        OutputWriter().write(output, payload)
        typer.echo(f"Scored {test_type.value} answers. Results saved to {output}.")
    else:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def pipeline(
    template: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Pipeline template JSON."),
    enable: List[str] = typer.Option([], help="Stage id to enable. Repeatable."),
    disable: List[str] = typer.Option([], help="Stage id to disable. Repeatable."),
    weight: List[str] = typer.Option([], help="Stage weight as id=fraction. Repeatable."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Output JSON path."),
) -> None:
    """Configure pipeline stages and check that enabled weights total 100%."""
    try:
        configuration = PipelineConfiguration.from_template(load_pipeline_template(template))
        for stage_id in enable:
            configuration.set_enabled(stage_id, True)
        for stage_id in disable:
            configuration.set_enabled(stage_id, False)
        for assignment in weight:
            stage_id, value = _parse_weight(assignment)
            configuration.set_weight(stage_id, value)
    except (RecruitScoreError, ValueError, KeyError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    validation = configuration.validate()
    for stage in configuration.stages:
        flag = "x" if stage.enabled else " "
        suffix = " (mandatory)" if stage.mandatory else ""
        typer.echo(f"[{flag}] {stage.id}: {stage.weight * 100:.0f}%{suffix}")
    typer.echo(f"Total weight: {validation.total_percent}%")
    if not validation.is_valid:
        typer.echo("Warning: enabled stage weights do not add up to 100%.")

    if output:
        payload = _with_metadata(
            {
                "stages": [stage.model_dump(mode="json") for stage in configuration.stages],
                "formula": configuration.formula,
                "total_weight": validation.total_weight,
                "is_valid": validation.is_valid,
            }
        )
        OutputWriter().write(output, payload)


@app.command("profile-save")
def profile_save(
    store: Path = typer.Option(..., dir_okay=False, help="Profile store JSON path."),
    name: str = typer.Option(..., help="Candidate name."),
    email: str = typer.Option(..., help="Candidate e-mail."),
    desired_role: str = typer.Option("", help="Desired role."),
    phone: Optional[str] = typer.Option(None, help="Phone number."),
) -> None:
    """Save the candidate profile for later sessions."""
    try:
        profile = CandidateProfile(name=name, email=email, phone=phone, desired_role=desired_role)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    ProfileStore(store).save(profile)
    typer.echo(f"Profile saved to {store}.")


@app.command("profile-show")
def profile_show(
    store: Path = typer.Option(..., dir_okay=False, help="Profile store JSON path."),
) -> None:
    """Print the saved candidate profile."""
    try:
        profile = ProfileStore(store).load()
    except ValueError as exc:
        typer.echo(f"Could not read profile: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if profile is None:
        typer.echo("No profile saved.")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(profile.model_dump(mode="json"), ensure_ascii=False, indent=2))


def _load_app_config(path: Path | None) -> AppConfig:
    if path is None:
        return AppConfig()
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    try:
        return load_config(loaded)
    except (ValueError, ValidationError) as exc:
        raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc


def _build_client(app_config: AppConfig, endpoint: str | None, api_key: str | None) -> HTTPAIClient:
    endpoint = endpoint or app_config.ai.endpoint
    if not endpoint:
        raise typer.BadParameter("An AI endpoint is required (--ai-endpoint or ai.endpoint in config).")
    return HTTPAIClient(endpoint, api_key or app_config.ai.api_key, timeout=app_config.ai.timeout)


def _parse_weight(assignment: str) -> tuple[str, float]:
    stage_id, sep, raw = assignment.partition("=")
    if not sep or not stage_id:
        raise ValueError(f"Weight must look like id=fraction, got {assignment!r}")
    try:
        return stage_id, float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid weight value in {assignment!r}") from exc


def _with_metadata(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "metadata": {
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        },
        **payload,
    }


def main() -> None:
    app()


if __name__ == "__main__":
    main()
