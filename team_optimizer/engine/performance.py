"""Workload optimisation: capacity vs. assigned load per developer.

Capacity is derived from velocity (story points × hours per point); load is
the estimated effort of a developer's active (non-done) tasks.
All functions are *pure*.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from team_optimizer.models import Developer, ResultModel, Task
from team_optimizer.settings import DEFAULT_SETTINGS, OptimizerSettings


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class UnderutilizedMember(ResultModel):
    """Developer with spare capacity and open work they could pick up."""

    developer_id: str
    name: str
    available_capacity: int = Field(ge=0, le=100)
    suggested_tasks: list[str] = Field(default_factory=list)


class OverloadedMember(ResultModel):
    """Developer whose active load exceeds capacity."""

    developer_id: str
    name: str
    overload_percentage: int = Field(ge=0, le=100)
    redistribution_suggestions: list[str] = Field(default_factory=list)


class SkillMismatch(ResultModel):
    """Developer assigned work outside their preferred task types."""

    developer_id: str
    name: str
    current_tasks: list[str] = Field(default_factory=list)
    better_suited_tasks: list[str] = Field(default_factory=list)


class PerformanceOptimization(ResultModel):
    """Workload section of the team analysis."""

    underutilized: list[UnderutilizedMember] = Field(default_factory=list)
    overloaded: list[OverloadedMember] = Field(default_factory=list)
    skill_mismatches: list[SkillMismatch] = Field(default_factory=list)


@dataclass(frozen=True)
class Workload:
    """Capacity and active assignments of one developer."""

    developer: Developer
    capacity: float
    load: float
    active_tasks: tuple[Task, ...]

    @property
    def utilization(self) -> float | None:
        if self.capacity <= 0:
            return None
        return self.load / self.capacity


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _percent(value: float) -> int:
    return max(0, min(100, round(value)))


def _label(task: Task) -> str:
    return task.title or task.id


def compute_workloads(
    developers: list[Developer],
    tasks: list[Task],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> list[Workload]:
    """Workload per developer in roster order.

    Assignees are resolved against *developers*; tasks pointing at anyone
    else are ignored.
    """
    assigned: dict[str, list[Task]] = {d.id: [] for d in developers}
    for task in tasks:
        if task.is_active and task.assignee in assigned:
            assigned[task.assignee].append(task)

    return [
        Workload(
            developer=dev,
            capacity=dev.profile.velocity * settings.hours_per_point,
            load=sum(t.estimated_effort for t in assigned[dev.id]),
            active_tasks=tuple(assigned[dev.id]),
        )
        for dev in developers
    ]


def _open_tasks_for(developer: Developer, tasks: list[Task], limit: int) -> list[str]:
    """Unassigned active tasks whose type the developer prefers."""
    preferred = set(developer.profile.preferred_tasks)
    matches = [
        _label(t) for t in tasks
        if t.assignee is None and t.is_active and t.type in preferred
    ]
    return matches[:limit]


def _redistribution(
    workload: Workload,
    underutilized: list[tuple[Workload, int]],
    settings: OptimizerSettings,
) -> list[str]:
    suggestions: list[str] = []
    name = workload.developer.name
    task_types = list(dict.fromkeys(t.type for t in workload.active_tasks))

    for other, available in underutilized:
        shared = [tt for tt in task_types if tt in other.developer.profile.preferred_tasks]
        if shared:
            suggestions.append(
                f"Move {'/'.join(shared)} work from {name} to {other.developer.name} "
                f"({available}% capacity available)"
            )

    if len(workload.active_tasks) > settings.max_concurrent_tasks:
        suggestions.append("Reduce number of concurrent tasks")
    if any(t.priority == "low" for t in workload.active_tasks):
        suggestions.append("Reassign low-priority tasks to other team members")
    return suggestions


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def analyze_performance(
    developers: list[Developer],
    tasks: list[Task],
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> PerformanceOptimization:
    """Find overloaded and underutilized developers and misaligned work."""
    workloads = compute_workloads(developers, tasks, settings)

    under: list[tuple[Workload, int]] = []
    over: list[Workload] = []
    for wl in workloads:
        if wl.capacity <= 0:
            continue
        if wl.load > wl.capacity:
            over.append(wl)
        elif wl.load < wl.capacity * settings.underutilized_ratio:
            under.append((wl, _percent((wl.capacity - wl.load) / wl.capacity * 100)))

    underutilized = [
        UnderutilizedMember(
            developer_id=wl.developer.id,
            name=wl.developer.name,
            available_capacity=available,
            suggested_tasks=_open_tasks_for(wl.developer, tasks, settings.max_task_suggestions),
        )
        for wl, available in under
    ]

    overloaded = [
        OverloadedMember(
            developer_id=wl.developer.id,
            name=wl.developer.name,
            overload_percentage=_percent((wl.load - wl.capacity) / wl.capacity * 100),
            redistribution_suggestions=_redistribution(wl, under, settings),
        )
        for wl in over
    ]

    mismatches: list[SkillMismatch] = []
    for wl in workloads:
        preferred = set(wl.developer.profile.preferred_tasks)
        off_type = [t for t in wl.active_tasks if t.type not in preferred]
        if off_type:
            mismatches.append(SkillMismatch(
                developer_id=wl.developer.id,
                name=wl.developer.name,
                current_tasks=[_label(t) for t in off_type],
                better_suited_tasks=_open_tasks_for(wl.developer, tasks, settings.max_task_suggestions),
            ))

    return PerformanceOptimization(
        underutilized=underutilized,
        overloaded=overloaded,
        skill_mismatches=mismatches,
    )
