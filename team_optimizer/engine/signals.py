"""Collaboration signal sources.

No interaction log is modelled, so the default source reconstructs the
collaboration picture from profile proxies: the self-reported
``collaboration`` score and overlap of ``strengths``. A source backed by real
review / co-commit data only has to implement :class:`CollaborationSignalSource`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from team_optimizer.models import Developer


@runtime_checkable
class CollaborationSignalSource(Protocol):
    """Supplies per-developer collaboration signals for one roster."""

    def interaction_score(self, developer: Developer) -> float:
        """How readily *developer* shares work, on a 1-10 scale."""
        ...

    def peers(self, developer: Developer, roster: list[Developer]) -> list[Developer]:
        """Other roster members *developer* works alongside."""
        ...


class ProfileSignalSource:
    """Profile-based proxy: collaboration score + shared strengths."""

    def interaction_score(self, developer: Developer) -> float:
        return float(developer.profile.collaboration)

    def peers(self, developer: Developer, roster: list[Developer]) -> list[Developer]:
        own = set(developer.profile.strengths)
        return [
            other
            for other in roster
            if other.id != developer.id and own.intersection(other.profile.strengths)
        ]
