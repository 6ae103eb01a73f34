"""Top-level entry points: ``analyze_team``, ``calculate_team_health`` and
``skill_gap_details``.

All accept model instances or plain dicts, validate them, and return a
fresh immutable result. Nothing is kept between calls; memoization, if
wanted, is the job of :class:`team_optimizer.cache.AnalysisCache`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from pydantic import Field

from team_optimizer.engine.collaboration import CollaborationInsights, analyze_collaboration
from team_optimizer.engine.composition import TeamComposition, analyze_composition
from team_optimizer.engine.health import TeamHealthMetrics, score_team_health
from team_optimizer.engine.performance import PerformanceOptimization, analyze_performance
from team_optimizer.engine.recommendations import Recommendations, synthesize_recommendations
from team_optimizer.engine.signals import CollaborationSignalSource
from team_optimizer.engine.skill_gaps import (
    SkillGapDetail,
    SkillGaps,
    analyze_skill_gap_details,
    analyze_skill_gaps,
)
from team_optimizer.models import Developer, ResultModel, SprintRecord, Task
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings
from team_optimizer.validation import (
    coerce_developers,
    coerce_requirements,
    coerce_sprints,
    coerce_tasks,
)

logger = logging.getLogger(__name__)


class TeamOptimizationAnalysis(ResultModel):
    """Complete team optimization report."""

    team_composition: TeamComposition
    skill_gaps: SkillGaps
    collaboration_insights: CollaborationInsights
    performance_optimization: PerformanceOptimization
    recommendations: Recommendations = Field(default_factory=Recommendations)


def analyze_team(
    developers: Iterable[Developer | Mapping[str, Any]],
    tasks: Iterable[Task | Mapping[str, Any]],
    project_requirements: Iterable[str],
    settings: OptimizerSettings | None = None,
    signals: CollaborationSignalSource | None = None,
) -> TeamOptimizationAnalysis:
    """Analyse team composition, gaps, collaboration and workload.

    Args:
        developers: Roster; ids must be unique.
        tasks: Backlog. ``assignee`` ids are resolved against *developers*.
        project_requirements: Skill tags the project needs.
        settings: Heuristic constants, defaults when omitted.
        signals: Collaboration signal source, profile proxy when omitted.

    Returns:
        TeamOptimizationAnalysis built from scratch for this call.

    Raises:
        InvalidInputError: If any record is malformed.
    """
    cfg = settings or DEFAULT_SETTINGS
    roster = coerce_developers(developers)
    backlog = coerce_tasks(tasks)
    requirements = coerce_requirements(project_requirements)

    composition = analyze_composition(roster, cfg)
    gaps = analyze_skill_gaps(roster, requirements, cfg)
    collaboration = analyze_collaboration(roster, cfg, signals)
    performance = analyze_performance(roster, backlog, cfg)
    recommendations = synthesize_recommendations(gaps, collaboration, performance, cfg)

    logger.debug(
        "Team analysis: members=%d tasks=%d critical_gaps=%d overloaded=%d",
        composition.total_members,
        len(backlog),
        len(gaps.critical_gaps),
        len(performance.overloaded),
    )

    return TeamOptimizationAnalysis(
        team_composition=composition,
        skill_gaps=gaps,
        collaboration_insights=collaboration,
        performance_optimization=performance,
        recommendations=recommendations,
    )


def calculate_team_health(
    developers: Iterable[Developer | Mapping[str, Any]],
    sprint_history: Iterable[SprintRecord | Mapping[str, Any]] | None = None,
    tasks: Iterable[Task | Mapping[str, Any]] | None = None,
    project_requirements: Iterable[str] | None = None,
    settings: OptimizerSettings | None = None,
) -> TeamHealthMetrics:
    """Headline health scores for a roster.

    Missing sprint history is not an error. Without *tasks* workload balance
    falls back to velocity spread; without *project_requirements* the
    settings' default requirement list is used.

    Raises:
        InvalidInputError: If any record is malformed.
    """
    return score_team_health(
        coerce_developers(developers),
        sprint_history=coerce_sprints(sprint_history),
        tasks=None if tasks is None else coerce_tasks(tasks),
        project_requirements=(
            None if project_requirements is None else coerce_requirements(project_requirements)
        ),
        settings=settings or DEFAULT_SETTINGS,
    )


def skill_gap_details(
    developers: Iterable[Developer | Mapping[str, Any]],
    project_requirements: Iterable[str],
    settings: OptimizerSettings | None = None,
) -> list[SkillGapDetail]:
    """Per-skill breakdown: holders, level, gap, impact and training advice.

    Raises:
        InvalidInputError: If any record is malformed.
    """
    return analyze_skill_gap_details(
        coerce_developers(developers),
        coerce_requirements(project_requirements),
        settings or DEFAULT_SETTINGS,
    )
