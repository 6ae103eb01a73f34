"""Input data model for the team optimization engine.

Developers, tasks and sprint records as handed over by the profile and task
stores. Field names are snake_case; the dashboard's camelCase names
(``preferredTasks``, ``estimatedEffort`` ...) are accepted as aliases.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
TaskType = Literal["feature", "bug", "refactor", "docs", "test", "devops"]
Priority = Literal["low", "medium", "high", "critical"]
TaskStatus = Literal["backlog", "todo", "in-progress", "review", "done"]

TASK_TYPES: tuple[str, ...] = ("feature", "bug", "refactor", "docs", "test", "devops")
ACTIVE_STATUSES: frozenset[str] = frozenset({"backlog", "todo", "in-progress", "review"})


class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def _unique(values: list[Any]) -> list[Any]:
    seen: set[Any] = set()
    out: list[Any] = []
    for v in values:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class DeveloperProfile(_InputModel):
    """Self-reported and measured working profile of a developer."""

    velocity: int = Field(default=0, ge=0)  # story points per sprint
    strengths: list[str] = Field(default_factory=list)
    preferred_tasks: list[TaskType] = Field(default_factory=list)
    commit_frequency: int = Field(default=0, ge=0)  # commits per week
    code_quality: int = Field(default=5, ge=1, le=10)
    collaboration: int = Field(default=5, ge=1, le=10)

    @field_validator("strengths")
    @classmethod
    def _dedupe_strengths(cls, v: list[str]) -> list[str]:
        cleaned = [s.strip() for s in v]
        if any(not s for s in cleaned):
            raise ValueError("Skill tags must be non-empty strings")
        return _unique(cleaned)

    @field_validator("preferred_tasks")
    @classmethod
    def _dedupe_preferred(cls, v: list[str]) -> list[str]:
        return _unique(v)


class Developer(_InputModel):
    """A team member."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = ""
    avatar: str | None = None
    profile: DeveloperProfile = Field(default_factory=DeveloperProfile)


class Task(_InputModel):
    """A backlog item. ``assignee`` is a developer id, resolved per call."""

    id: str = Field(..., min_length=1)
    title: str = ""
    type: TaskType
    priority: Priority = "medium"
    status: TaskStatus = "backlog"
    estimated_effort: float = Field(default=0.0, ge=0)  # hours
    assignee: str | None = None

    @field_validator("assignee", mode="before")
    @classmethod
    def _assignee_id(cls, v: Any) -> Any:
        # The task store may embed the whole developer record.
        if isinstance(v, dict):
            return v.get("id")
        if isinstance(v, Developer):
            return v.id
        return v

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class SprintRecord(_InputModel):
    """Outcome of one finished sprint."""

    sprint_id: str = Field(..., min_length=1)
    name: str = ""
    planned_velocity: float = Field(default=0.0, ge=0)
    actual_velocity: float = Field(default=0.0, ge=0)
    completion_rate: float = Field(default=1.0, ge=0)


# ---------------------------------------------------------------------------
# Result base
# ---------------------------------------------------------------------------
class ResultModel(BaseModel):
    """Base for engine outputs: immutable, camelCase when dumped by alias."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible dict for the presentation layer."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------
def index_developers(developers: list[Developer]) -> dict[str, Developer]:
    """Map developer id → developer for the roster of a single call."""
    return {d.id: d for d in developers}


def skill_holders(developers: list[Developer]) -> dict[str, list[Developer]]:
    """Skill → developers holding it, in first-seen roster order."""
    holders: dict[str, list[Developer]] = {}
    for dev in developers:
        for skill in dev.profile.strengths:
            holders.setdefault(skill, []).append(dev)
    return holders
