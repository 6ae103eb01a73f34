"""Dated history of team analyses, for comparing one run against a later one.

Snapshots are kept newest-last in a single JSON file. Each carries the
:func:`team_optimizer.cache.analysis_key` of its inputs (when the caller has
one), so the history of a given roster/backlog can be told apart from runs on
other inputs. :func:`compare_snapshots` reports what changed between two runs.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import os
from pathlib import Path
import tempfile
import threading
import uuid

from pydantic import Field, ValidationError

from team_optimizer.engine.recommendations import RecommendationPriority
from team_optimizer.models import ResultModel
from team_optimizer.optimizer import TeamOptimizationAnalysis


logger = logging.getLogger(__name__)

_DEFAULT_PATH = "team_analysis_history.json"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class AnalysisSnapshot(ResultModel):
    """One recorded analysis run."""

    snapshot_id: str
    taken_at: datetime
    analysis_key: str | None = None
    analysis: TeamOptimizationAnalysis


class SnapshotComparison(ResultModel):
    """Differences between an older and a newer analysis."""

    older_id: str
    newer_id: str
    resolved_gaps: list[str] = Field(default_factory=list)
    new_gaps: list[str] = Field(default_factory=list)
    newly_overloaded: list[str] = Field(default_factory=list)
    no_longer_overloaded: list[str] = Field(default_factory=list)
    new_bottlenecks: list[str] = Field(default_factory=list)
    cleared_bottlenecks: list[str] = Field(default_factory=list)
    priority_before: RecommendationPriority
    priority_after: RecommendationPriority


def _added(before: list[str], after: list[str]) -> list[str]:
    seen = set(before)
    return [x for x in after if x not in seen]


def compare_snapshots(older: AnalysisSnapshot, newer: AnalysisSnapshot) -> SnapshotComparison:
    """Gaps, overloads and bottlenecks that appeared or went away."""
    a, b = older.analysis, newer.analysis
    over_a = [m.name for m in a.performance_optimization.overloaded]
    over_b = [m.name for m in b.performance_optimization.overloaded]
    neck_a = a.collaboration_insights.communication_patterns.bottlenecks
    neck_b = b.collaboration_insights.communication_patterns.bottlenecks

    return SnapshotComparison(
        older_id=older.snapshot_id,
        newer_id=newer.snapshot_id,
        resolved_gaps=_added(b.skill_gaps.critical_gaps, a.skill_gaps.critical_gaps),
        new_gaps=_added(a.skill_gaps.critical_gaps, b.skill_gaps.critical_gaps),
        newly_overloaded=_added(over_a, over_b),
        no_longer_overloaded=_added(over_b, over_a),
        new_bottlenecks=_added(neck_a, neck_b),
        cleared_bottlenecks=_added(neck_b, neck_a),
        priority_before=a.recommendations.priority,
        priority_after=b.recommendations.priority,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
class AnalysisSnapshotRepository:
    """Thread-safe, bounded history of :class:`AnalysisSnapshot` records."""

    def __init__(self, history_path: str = _DEFAULT_PATH, max_snapshots: int = 50) -> None:
        if max_snapshots < 1:
            raise ValueError("max_snapshots must be at least 1")
        self._path = Path(history_path)
        self._max = max_snapshots
        self._lock = threading.Lock()

    def record(
        self,
        analysis: TeamOptimizationAnalysis,
        analysis_key: str | None = None,
        taken_at: datetime | None = None,
    ) -> AnalysisSnapshot:
        """Append *analysis* to the history, dropping the oldest beyond the limit."""
        snapshot = AnalysisSnapshot(
            snapshot_id=uuid.uuid4().hex,
            taken_at=taken_at or datetime.now(timezone.utc),
            analysis_key=analysis_key,
            analysis=analysis,
        )
        with self._lock:
            snapshots = self._read()
            snapshots.append(snapshot)
            dropped = len(snapshots) - self._max
            if dropped > 0:
                snapshots = snapshots[dropped:]
                logger.debug("Dropped %d old analysis snapshot(s)", dropped)
            self._write(snapshots)
        return snapshot

    def history(self, analysis_key: str | None = None) -> list[AnalysisSnapshot]:
        """Snapshots oldest first, optionally only those for one input key."""
        with self._lock:
            snapshots = self._read()
        if analysis_key is None:
            return snapshots
        return [s for s in snapshots if s.analysis_key == analysis_key]

    def latest(self, analysis_key: str | None = None) -> AnalysisSnapshot | None:
        snapshots = self.history(analysis_key)
        return snapshots[-1] if snapshots else None

    def get(self, snapshot_id: str) -> AnalysisSnapshot | None:
        return next((s for s in self.history() if s.snapshot_id == snapshot_id), None)

    def compare_latest(self, analysis_key: str | None = None) -> SnapshotComparison | None:
        """Compare the two most recent snapshots, ``None`` if fewer exist."""
        snapshots = self.history(analysis_key)
        if len(snapshots) < 2:
            return None
        return compare_snapshots(snapshots[-2], snapshots[-1])

    def clear(self) -> None:
        with self._lock:
            if self._path.exists():
                self._path.unlink()

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    def _read(self) -> list[AnalysisSnapshot]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return [AnalysisSnapshot.model_validate(item) for item in data["snapshots"]]
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
            raise ValueError(f"Failed to read analysis history {self._path}: {exc}") from exc

    def _write(self, snapshots: list[AnalysisSnapshot]) -> None:
        payload = {"snapshots": [s.to_json_dict() for s in snapshots]}
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            logger.warning("Could not write analysis history %s: %s", self._path, exc)
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ValueError(f"Failed to write analysis history {self._path}: {exc}") from exc
