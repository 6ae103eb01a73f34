"""Input coercion and validation at the engine boundary.

Callers may pass either model instances or the plain dicts delivered by the
profile/task stores. Anything malformed is rejected with
:class:`InvalidInputError` before a single score is computed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from team_optimizer.models import Developer, SprintRecord, Task

_M = TypeVar("_M", bound=BaseModel)


class InvalidInputError(ValueError):
    """A roster, backlog or requirement list failed validation."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _coerce_list(raw: Iterable[Any] | None, model: type[_M], label: str) -> list[_M]:
    if raw is None:
        return []
    if isinstance(raw, (str, bytes, Mapping)):
        raise InvalidInputError(f"{label} must be a sequence of records")

    items: list[_M] = []
    for idx, item in enumerate(raw):
        if isinstance(item, model):
            items.append(item)
            continue
        if not isinstance(item, Mapping):
            raise InvalidInputError(
                f"{label}[{idx}] must be a {model.__name__} or mapping, got {type(item).__name__}"
            )
        try:
            items.append(model.model_validate(item))
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid {label}[{idx}]: {exc}") from exc
    return items


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def coerce_developers(raw: Iterable[Developer | Mapping[str, Any]] | None) -> list[Developer]:
    """Validate a roster; developer ids must be unique."""
    developers = _coerce_list(raw, Developer, "developers")
    seen: set[str] = set()
    for dev in developers:
        if dev.id in seen:
            raise InvalidInputError(f"Duplicate developer id '{dev.id}'")
        seen.add(dev.id)
    return developers


def coerce_tasks(raw: Iterable[Task | Mapping[str, Any]] | None) -> list[Task]:
    """Validate a backlog."""
    return _coerce_list(raw, Task, "tasks")


def coerce_sprints(raw: Iterable[SprintRecord | Mapping[str, Any]] | None) -> list[SprintRecord]:
    """Validate sprint history. ``None`` means no history."""
    return _coerce_list(raw, SprintRecord, "sprint_history")


def coerce_requirements(raw: Iterable[str] | None) -> list[str]:
    """Validate required skills, keeping caller order and dropping repeats."""
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        raise InvalidInputError("project_requirements must be a sequence of skill tags")

    out: list[str] = []
    for idx, skill in enumerate(raw):
        if not isinstance(skill, str) or not skill.strip():
            raise InvalidInputError(f"project_requirements[{idx}] must be a non-empty string")
        skill = skill.strip()
        if skill not in out:
            out.append(skill)
    return out
