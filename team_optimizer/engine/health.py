"""Team health scoring.

Headline scores (0-100):
    skill_coverage      – share of required skills held by at least one member
    workload_balance    – 100 × (1 − coefficient of variation of utilisation)
    collaboration_score – mean collaboration rating rescaled to 0-100
    overall_health      – weighted average of the three (weights in settings)

``growth_potential`` and the sprint velocity trend are reported alongside but
do not feed ``overall_health``.
"""

from __future__ import annotations

import logging
from typing import Literal

import numpy as np
from pydantic import Field

from team_optimizer.engine.performance import compute_workloads
from team_optimizer.engine.skill_gaps import skill_coverage
from team_optimizer.models import Developer, ResultModel, SprintRecord, Task
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings

logger = logging.getLogger(__name__)

VelocityTrend = Literal["improving", "declining", "stable"]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class TeamHealthMetrics(ResultModel):
    """Headline health scores plus the statements that explain them."""

    overall_health: float = Field(ge=0.0, le=100.0, default=0.0)
    skill_coverage: float = Field(ge=0.0, le=100.0, default=0.0)
    workload_balance: float = Field(ge=0.0, le=100.0, default=0.0)
    collaboration_score: float = Field(ge=0.0, le=100.0, default=0.0)
    growth_potential: float = Field(ge=0.0, le=100.0, default=0.0)
    velocity_trend: VelocityTrend = "stable"
    strengths: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------
def _clamp(value: float) -> float:
    return round(max(0.0, min(100.0, float(value))), 1)


def coverage_score(developers: list[Developer], requirements: list[str]) -> float:
    if not developers:
        return 0.0
    if not requirements:
        return 100.0
    coverage = skill_coverage(developers, requirements)
    covered = sum(1 for n in coverage.values() if n > 0)
    return _clamp(covered / len(requirements) * 100)


def _dispersion_score(values: list[float]) -> float:
    """100 for perfectly even values, falling to 0 as CV reaches 1."""
    if not values:
        return 100.0
    arr = np.asarray(values, dtype=float)
    mean = float(np.mean(arr))
    if mean <= 0:
        return 100.0
    cv = float(np.std(arr)) / mean
    return _clamp((1.0 - min(1.0, cv)) * 100)


def balance_score(
    developers: list[Developer],
    tasks: list[Task] | None,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> float:
    """Evenness of utilisation, or of velocity when no backlog is given."""
    if not developers:
        return 0.0
    if tasks is None:
        return _dispersion_score([float(d.profile.velocity) for d in developers])
    ratios = [
        wl.utilization
        for wl in compute_workloads(developers, tasks, settings)
        if wl.utilization is not None
    ]
    return _dispersion_score(ratios)


def collaboration_score(developers: list[Developer]) -> float:
    if not developers:
        return 0.0
    mean = float(np.mean([d.profile.collaboration for d in developers]))
    return _clamp(mean * 10)


def growth_potential(developers: list[Developer]) -> float:
    """Skill breadth per developer and across the team."""
    if not developers:
        return 0.0
    avg_skills = sum(len(d.profile.strengths) for d in developers) / len(developers)
    unique = len({s for d in developers for s in d.profile.strengths})
    return _clamp(avg_skills * 10 + unique * 2)


def velocity_trend(
    sprints: list[SprintRecord],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> VelocityTrend:
    """Compare the mean of the latest sprints with the window before it."""
    window = settings.trend_window
    if len(sprints) < window * 2:
        return "stable"
    velocities = np.array([s.actual_velocity for s in sprints], dtype=float)
    recent = float(np.mean(velocities[-window:]))
    older = float(np.mean(velocities[-2 * window:-window]))
    if older <= 0:
        return "improving" if recent > 0 else "stable"
    change = (recent - older) / older * 100
    if change > settings.trend_change_pct:
        return "improving"
    if change < -settings.trend_change_pct:
        return "declining"
    return "stable"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------
def _strengths(
    developers: list[Developer],
    scores: dict[str, float],
    trend: VelocityTrend,
    settings: OptimizerSettings,
) -> list[str]:
    out: list[str] = []
    high = settings.strength_threshold
    if scores["coverage"] >= high:
        out.append("Project skill requirements are well covered")
    if scores["balance"] >= high:
        out.append("Workload is evenly distributed across the team")
    if scores["collaboration"] >= high:
        out.append("Strong collaboration culture")

    avg_quality = sum(d.profile.code_quality for d in developers) / len(developers)
    if avg_quality > settings.high_quality_average:
        out.append("High code quality standards")
    if len({s for d in developers for s in d.profile.strengths}) > settings.diverse_skill_count:
        out.append("Diverse skill set")
    if trend == "improving":
        out.append("Sprint velocity is improving")
    return out


def _risks(
    developers: list[Developer],
    sprints: list[SprintRecord],
    scores: dict[str, float],
    trend: VelocityTrend,
    settings: OptimizerSettings,
) -> list[str]:
    out: list[str] = []
    low = settings.risk_threshold
    if scores["coverage"] < settings.coverage_risk_threshold:
        out.append("Insufficient skill coverage for project requirements")
    if scores["balance"] < low:
        out.append("Workload is unevenly distributed")
    if scores["collaboration"] < low:
        out.append("Low collaboration across the team")

    if len(developers) < settings.min_team_size:
        out.append("Team size too small - single points of failure")
    slow = sum(1 for d in developers if d.profile.velocity < settings.low_velocity_points)
    if slow > len(developers) * settings.low_velocity_share:
        out.append("High percentage of low-velocity developers")

    if trend == "declining":
        out.append("Sprint velocity is declining")
    recent = sprints[-settings.trend_window:]
    if recent:
        completion = float(np.mean([s.completion_rate for s in recent]))
        if completion < settings.completion_risk_rate:
            out.append("Sprint completion rate is low - consider reducing sprint scope")
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def score_team_health(
    developers: list[Developer],
    sprint_history: list[SprintRecord] | None = None,
    tasks: list[Task] | None = None,
    project_requirements: list[str] | None = None,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> TeamHealthMetrics:
    """Score team health. An empty roster scores 0 everywhere."""
    if not developers:
        return TeamHealthMetrics()

    sprints = sprint_history or []
    requirements = (
        list(settings.default_requirements)
        if project_requirements is None
        else project_requirements
    )

    scores = {
        "coverage": coverage_score(developers, requirements),
        "balance": balance_score(developers, tasks, settings),
        "collaboration": collaboration_score(developers),
    }
    overall = (
        scores["coverage"] * settings.coverage_weight
        + scores["balance"] * settings.balance_weight
        + scores["collaboration"] * settings.collaboration_weight
    )
    trend = velocity_trend(sprints, settings)

    logger.debug(
        "Team health: coverage=%.1f balance=%.1f collaboration=%.1f trend=%s",
        scores["coverage"], scores["balance"], scores["collaboration"], trend,
    )

    return TeamHealthMetrics(
        overall_health=_clamp(overall),
        skill_coverage=scores["coverage"],
        workload_balance=scores["balance"],
        collaboration_score=scores["collaboration"],
        growth_potential=growth_potential(developers),
        velocity_trend=trend,
        strengths=_strengths(developers, scores, trend, settings),
        risk_factors=_risks(developers, sprints, scores, trend, settings),
    )
