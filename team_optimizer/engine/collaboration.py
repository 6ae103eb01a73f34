"""Collaboration analysis: communication roles and pairing opportunities.

Roles are classified from a :class:`CollaborationSignalSource`; the default
proxy uses the profile's collaboration score and skill overlap.
All functions are *pure*.
"""

from __future__ import annotations

from pydantic import Field

from team_optimizer.engine.signals import CollaborationSignalSource, ProfileSignalSource
from team_optimizer.models import Developer, ResultModel, skill_holders
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class PairingOpportunity(ResultModel):
    """A mentor / mentee match on one skill."""

    mentor: str
    mentee: str
    skill: str
    benefit: float = Field(ge=0.0, le=100.0)


class CommunicationPatterns(ResultModel):
    """Developer names grouped by communication role."""

    connectors: list[str] = Field(default_factory=list)
    isolated: list[str] = Field(default_factory=list)
    bottlenecks: list[str] = Field(default_factory=list)


class CollaborationInsights(ResultModel):
    """Collaboration section of the team analysis."""

    pair_programming_opportunities: list[PairingOpportunity] = Field(default_factory=list)
    communication_patterns: CommunicationPatterns = Field(default_factory=CommunicationPatterns)
    knowledge_sharing_needs: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _low_sharing_singletons(
    developers: list[Developer],
    scores: dict[str, float],
    settings: OptimizerSettings,
) -> dict[str, Developer]:
    """Skill → its only low-sharing holder.

    Holders scoring at or above ``connector_threshold`` spread what they
    know, so a skill counts as concentrated when exactly one of the
    remaining holders has it.
    """
    out: dict[str, Developer] = {}
    for skill, devs in skill_holders(developers).items():
        low = [d for d in devs if scores[d.id] < settings.connector_threshold]
        if len(low) == 1:
            out[skill] = low[0]
    return out


def pairing_benefit(code_quality: int, coverage: int, scarcity_weight: float) -> float:
    """Training benefit, rising with mentor quality and skill scarcity.

    Equals the mentor's code quality when the mentor is the only holder and
    falls towards ``code_quality / (1 + scarcity_weight)`` as coverage grows.
    """
    coverage = max(coverage, 1)
    return round(code_quality * (1 + scarcity_weight / coverage) / (1 + scarcity_weight), 2)


def _classify(
    developers: list[Developer],
    signals: CollaborationSignalSource,
    scores: dict[str, float],
    settings: OptimizerSettings,
) -> CommunicationPatterns:
    concentrated = {dev.id for dev in _low_sharing_singletons(developers, scores, settings).values()}

    connectors: list[str] = []
    isolated: list[str] = []
    bottlenecks: list[str] = []

    for dev in developers:
        score = scores[dev.id]
        if score >= settings.connector_threshold:
            if len(signals.peers(dev, developers)) >= settings.connector_min_peers:
                connectors.append(dev.name)
        elif dev.id in concentrated:
            bottlenecks.append(dev.name)
        if score <= settings.isolated_threshold:
            isolated.append(dev.name)

    return CommunicationPatterns(
        connectors=connectors,
        isolated=isolated,
        bottlenecks=bottlenecks,
    )


def _pairings(developers: list[Developer], settings: OptimizerSettings) -> list[PairingOpportunity]:
    holders = skill_holders(developers)
    pairs: list[PairingOpportunity] = []

    for mentor in developers:
        mentor_tasks = set(mentor.profile.preferred_tasks)
        for skill in mentor.profile.strengths:
            benefit = pairing_benefit(
                mentor.profile.code_quality,
                len(holders[skill]),
                settings.scarcity_weight,
            )
            pairs.extend(
                PairingOpportunity(
                    mentor=mentor.name,
                    mentee=mentee.name,
                    skill=skill,
                    benefit=benefit,
                )
                for mentee in developers
                if mentee.id != mentor.id
                and skill not in mentee.profile.strengths
                and mentor_tasks.intersection(mentee.profile.preferred_tasks)
            )

    # sorted() is stable: equal benefits keep roster order
    ranked = sorted(pairs, key=lambda p: p.benefit, reverse=True)
    return ranked[:settings.max_pairings]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def analyze_collaboration(
    developers: list[Developer],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
    signals: CollaborationSignalSource | None = None,
) -> CollaborationInsights:
    """Classify communication roles and find the best mentoring pairs.

    Knowledge-sharing needs are the skills held by exactly one low-sharing
    developer; their holders are the bottleneck candidates.
    """
    source = signals if signals is not None else ProfileSignalSource()
    scores = {dev.id: source.interaction_score(dev) for dev in developers}

    return CollaborationInsights(
        pair_programming_opportunities=_pairings(developers, settings),
        communication_patterns=_classify(developers, source, scores, settings),
        knowledge_sharing_needs=list(_low_sharing_singletons(developers, scores, settings)),
    )
