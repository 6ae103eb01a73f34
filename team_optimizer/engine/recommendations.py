"""Recommendation synthesis.

Turns the gap, collaboration and workload findings into three ordered tiers
of action items. All functions are *pure*.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from team_optimizer.engine.collaboration import CollaborationInsights
from team_optimizer.engine.performance import PerformanceOptimization
from team_optimizer.engine.skill_gaps import SkillGaps
from team_optimizer.models import ResultModel
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings


RecommendationPriority = Literal["low", "medium", "high"]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class Recommendations(ResultModel):
    """Action items grouped by horizon."""

    immediate: list[str] = Field(default_factory=list)
    short_term: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)
    priority: RecommendationPriority = "low"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def synthesize_recommendations(
    skill_gaps: SkillGaps,
    collaboration: CollaborationInsights,
    performance: PerformanceOptimization,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> Recommendations:
    """Build immediate, short-term and long-term action lists."""
    immediate: list[str] = []
    short_term: list[str] = []
    long_term: list[str] = []

    _immediate_recs(skill_gaps, performance, immediate)
    _short_term_recs(collaboration, performance, settings, short_term)
    _long_term_recs(skill_gaps, collaboration, long_term)

    if skill_gaps.critical_gaps:
        priority: RecommendationPriority = "high"
    elif performance.overloaded:
        priority = "medium"
    else:
        priority = "low"

    return Recommendations(
        immediate=immediate,
        short_term=short_term,
        long_term=long_term,
        priority=priority,
    )


# ---------------------------------------------------------------------------
# Tier generators
# ---------------------------------------------------------------------------
def _immediate_recs(
    skill_gaps: SkillGaps,
    performance: PerformanceOptimization,
    recs: list[str],
) -> None:
    """Overloaded people first, then skills nobody has."""
    recs.extend(
        f"Redistribute work from {m.name} ({m.overload_percentage}% over capacity)"
        for m in performance.overloaded
    )
    recs.extend(
        f"Hire or train for {skill} (no current coverage)"
        for skill in skill_gaps.critical_gaps
    )


def _short_term_recs(
    collaboration: CollaborationInsights,
    performance: PerformanceOptimization,
    settings: OptimizerSettings,
    recs: list[str],
) -> None:
    """High-value pairing sessions and assignment realignment."""
    recs.extend(
        f"Pair {p.mentor} with {p.mentee} on {p.skill} (benefit {p.benefit:.1f})"
        for p in collaboration.pair_programming_opportunities
        if p.benefit >= settings.pairing_benefit_cutoff
    )
    recs.extend(
        f"Realign {m.name}'s assignments with preferred task types"
        for m in performance.skill_mismatches
    )


def _long_term_recs(
    skill_gaps: SkillGaps,
    collaboration: CollaborationInsights,
    recs: list[str],
) -> None:
    """Remove single points of failure."""
    recs.extend(
        f"Cross-train a second developer in {skill}"
        for skill in skill_gaps.emerging_needs
    )
    recs.extend(
        f"Spread {name}'s sole-held knowledge through documentation and pairing"
        for name in collaboration.communication_patterns.bottlenecks
    )
