"""Team composition analysis: experience levels and skill distribution.

All functions are *pure*.
"""

from __future__ import annotations

from collections import Counter

from pydantic import Field

from team_optimizer.models import Developer, ResultModel
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings


EXPERIENCE_LEVELS: tuple[str, ...] = ("junior", "mid", "senior", "lead")


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class TeamComposition(ResultModel):
    """Headcount and distribution of levels, skills and preferred work."""

    total_members: int = Field(ge=0)
    experience_levels: dict[str, int]
    skill_distribution: dict[str, int]
    role_balance: dict[str, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Experience level
# ---------------------------------------------------------------------------
def experience_score(developer: Developer, settings: OptimizerSettings = DEFAULT_SETTINGS) -> float:
    """Composite 0-10 score of normalised velocity and code quality."""
    p = developer.profile
    velocity_score = min(p.velocity / settings.velocity_reference, 1.0) * 10
    return (velocity_score + p.code_quality) / 2


def experience_level(developer: Developer, settings: OptimizerSettings = DEFAULT_SETTINGS) -> str:
    score = experience_score(developer, settings)
    if score >= settings.lead_threshold:
        return "lead"
    if score >= settings.senior_threshold:
        return "senior"
    if score >= settings.mid_threshold:
        return "mid"
    return "junior"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def analyze_composition(
    developers: list[Developer],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> TeamComposition:
    """Summarise who is on the team and what they bring."""
    levels: dict[str, int] = dict.fromkeys(EXPERIENCE_LEVELS, 0)
    skills: Counter[str] = Counter()
    roles: Counter[str] = Counter()

    for dev in developers:
        levels[experience_level(dev, settings)] += 1
        skills.update(dev.profile.strengths)
        roles.update(dev.profile.preferred_tasks)

    return TeamComposition(
        total_members=len(developers),
        experience_levels=levels,
        skill_distribution=dict(skills),
        role_balance=dict(roles),
    )
