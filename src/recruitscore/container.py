"""Dependency injection container for the scoring toolkit."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    AssessmentRegistry,
    BigFiveScorer,
    CandidateScoreAggregator,
    DiscScorer,
    SjtScorer,
)
from .core.aggregator import AggregatorConfig
from .core.scorers.bigfive import BigFiveConfig
from .core.scorers.sjt import SjtConfig
from .ranking import CriteriaLoader, CvLoader, JobLoader, OutputWriter, RankingService


class RecruitScoreContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    aggregator = providers.Singleton(CandidateScoreAggregator)

    bigfive_scorer = providers.Singleton(BigFiveScorer)
    disc_scorer = providers.Singleton(DiscScorer)
    sjt_scorer = providers.Singleton(SjtScorer)

    scorers = providers.List(
        bigfive_scorer,
        disc_scorer,
        sjt_scorer,
    )

    assessment_registry = providers.Singleton(
        AssessmentRegistry,
        scorers=scorers,
    )

    cv_loader = providers.Singleton(CvLoader)
    job_loader = providers.Singleton(JobLoader)
    criteria_loader = providers.Singleton(CriteriaLoader)
    writer = providers.Singleton(OutputWriter)

    ranking_service = providers.Factory(
        RankingService,
        aggregator=aggregator,
        max_workers=config.max_workers,
    )


def create_container(*, settings: dict | None = None) -> RecruitScoreContainer:
    """Instantiate container with optional overrides."""

    container = RecruitScoreContainer()

    if not settings:
        return container

    ranking_settings = settings.get("ranking", {}) if isinstance(settings, dict) else {}
    if ranking_settings:
        container.config.override(ranking_settings)

    scorer_settings = settings.get("scorers", {}) if isinstance(settings, dict) else {}

    if "aggregator" in scorer_settings:
        aggregator_config = AggregatorConfig(**scorer_settings["aggregator"])
        container.aggregator.override(
            providers.Singleton(CandidateScoreAggregator, config=aggregator_config)
        )

    if "bigfive" in scorer_settings:
        bigfive_config = BigFiveConfig(**scorer_settings["bigfive"])
        container.bigfive_scorer.override(
            providers.Singleton(BigFiveScorer, config=bigfive_config)
        )

    if "sjt" in scorer_settings:
        sjt_config = SjtConfig(**scorer_settings["sjt"])
        container.sjt_scorer.override(providers.Singleton(SjtScorer, config=sjt_config))

    return container
