"""Skill gap detection against the project's required skills.

All functions are *pure*.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from team_optimizer.models import Developer, ResultModel, skill_holders
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings


GapImpact = Literal["low", "medium", "high", "critical"]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class SkillHolder(ResultModel):
    developer_id: str
    name: str
    proficiency: int = Field(ge=1, le=10)


class SkillGapDetail(ResultModel):
    """Coverage of one required skill and how to close its gap."""

    skill: str
    current_level: int = Field(ge=0, le=10)
    required_level: int = Field(ge=1, le=10)
    gap: int = Field(ge=0, le=10)
    impact: GapImpact
    developers_with_skill: list[SkillHolder] = Field(default_factory=list)
    training_recommendations: list[str] = Field(default_factory=list)


class SkillGaps(ResultModel):
    """Uncovered and thinly covered required skills."""

    critical_gaps: list[str] = Field(default_factory=list)
    emerging_needs: list[str] = Field(default_factory=list)
    overrepresented: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def skill_coverage(developers: list[Developer], requirements: list[str]) -> dict[str, int]:
    """Required skill → number of developers holding it (requirement order)."""
    holders = skill_holders(developers)
    return {skill: len(holders.get(skill, [])) for skill in requirements}


def analyze_skill_gaps(
    developers: list[Developer],
    requirements: list[str],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> SkillGaps:
    """Find required skills nobody has (critical) or only one person has."""
    coverage = skill_coverage(developers, requirements)

    critical = [skill for skill, n in coverage.items() if n == 0]
    emerging = [skill for skill, n in coverage.items() if n == 1]

    recs = [f"Hire or train for {skill}" for skill in critical]
    recs.extend(f"Cross-train a second developer in {skill}" for skill in emerging)

    return SkillGaps(
        critical_gaps=critical,
        emerging_needs=emerging,
        overrepresented=_overrepresented(developers, settings),
        recommendations=recs,
    )


def _overrepresented(developers: list[Developer], settings: OptimizerSettings) -> list[str]:
    """Skills so common they suggest an unbalanced team."""
    team_size = len(developers)
    if team_size < settings.overrepresented_min_team:
        return []
    return [
        skill
        for skill, devs in skill_holders(developers).items()
        if len(devs) / team_size > settings.overrepresented_ratio
    ]


def _impact(holder_count: int, settings: OptimizerSettings) -> GapImpact:
    if holder_count == 0:
        return "critical"
    if holder_count == 1:
        return "high"
    if holder_count < settings.well_covered_holders:
        return "medium"
    return "low"


def _training(skill: str, holders: list[SkillHolder], gap: int, required: int) -> list[str]:
    if not holders:
        return [
            f"Training needed for {skill}",
            f"Hire a developer experienced in {skill}",
        ]
    recs: list[str] = []
    if len(holders) == 1:
        recs.append(f"Pair {holders[0].name} with a second developer on {skill}")
    if gap > 0:
        recs.append(f"Raise {skill} proficiency to {required}")
    return recs


def analyze_skill_gap_details(
    developers: list[Developer],
    requirements: list[str],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> list[SkillGapDetail]:
    """One entry per required skill, in requirement order.

    A holder's proficiency is their code quality, there being no per-skill
    rating. ``current_level`` is the best holder's proficiency and impact
    falls as more developers hold the skill.
    """
    holders_by_skill = skill_holders(developers)
    required = settings.required_skill_level
    details: list[SkillGapDetail] = []

    for skill in requirements:
        holders = [
            SkillHolder(developer_id=d.id, name=d.name, proficiency=d.profile.code_quality)
            for d in holders_by_skill.get(skill, [])
        ]
        current = max((h.proficiency for h in holders), default=0)
        gap = max(0, required - current)
        details.append(SkillGapDetail(
            skill=skill,
            current_level=current,
            required_level=required,
            gap=gap,
            impact=_impact(len(holders), settings),
            developers_with_skill=holders,
            training_recommendations=_training(skill, holders, gap, required),
        ))
    return details
