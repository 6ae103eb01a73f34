"""Memoization of team analyses, kept outside the pure engine.

The engine never caches; a caller that re-renders the same roster often
(dashboard refreshes) can hold an :class:`AnalysisCache` and route calls
through it. Entries are keyed by a digest of the validated inputs and the
settings, so any change to a record produces a miss.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
import hashlib
import json
import logging
import threading
from typing import Any

from team_optimizer.engine.signals import CollaborationSignalSource
from team_optimizer.models import Developer, Task
from team_optimizer.optimizer import TeamOptimizationAnalysis, analyze_team
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings
from team_optimizer.validation import coerce_developers, coerce_requirements, coerce_tasks

logger = logging.getLogger(__name__)

Analyzer = Callable[..., TeamOptimizationAnalysis]


def analysis_key(
    developers: list[Developer],
    tasks: list[Task],
    requirements: list[str],
    settings: OptimizerSettings,
) -> str:
    """SHA-256 over the canonical JSON of validated inputs."""
    payload = {
        "developers": [d.model_dump(mode="json") for d in developers],
        "tasks": [t.model_dump(mode="json") for t in tasks],
        "requirements": requirements,
        "settings": settings.model_dump(mode="json"),
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()


@dataclass
class AnalysisCache:
    """Thread-safe LRU cache of :class:`TeamOptimizationAnalysis` results."""

    max_entries: int = 32
    analyzer: Analyzer = analyze_team
    lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    hits: int = field(default=0, init=False)
    misses: int = field(default=0, init=False)
    _entries: OrderedDict[str, TeamOptimizationAnalysis] = field(default_factory=OrderedDict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")

    def get_or_compute(
        self,
        developers: Iterable[Developer | Mapping[str, Any]],
        tasks: Iterable[Task | Mapping[str, Any]],
        project_requirements: Iterable[str],
        settings: OptimizerSettings | None = None,
        signals: CollaborationSignalSource | None = None,
    ) -> TeamOptimizationAnalysis:
        """Return the cached analysis for these inputs, computing it on a miss.

        Every call gets its own deep copy, so a caller editing the result
        cannot leak into later hits. Calls with a custom *signals* source
        bypass the cache since the source's data is not part of the key.
        """
        cfg = settings or DEFAULT_SETTINGS
        roster = coerce_developers(developers)
        backlog = coerce_tasks(tasks)
        requirements = coerce_requirements(project_requirements)

        if signals is not None:
            return self.analyzer(roster, backlog, requirements, cfg, signals)

        key = analysis_key(roster, backlog, requirements, cfg)
        with self.lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached.model_copy(deep=True)
            self.misses += 1

        result = self.analyzer(roster, backlog, requirements, cfg)

        with self.lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached analysis %s", evicted[:12])
        return result.model_copy(deep=True)

    def clear(self) -> None:
        with self.lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> dict[str, int]:
        with self.lock:
            return {"hits": self.hits, "misses": self.misses, "size": len(self._entries)}
