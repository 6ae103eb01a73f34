"""Tunable heuristics for the optimization engine.

Every threshold and weight the analyzers use lives here so they can be tuned
without touching the algorithms. ``settings_from_env`` overlays
``TEAM_OPTIMIZER_<FIELD>`` environment variables on the defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEAM_OPTIMIZER_"


class OptimizerSettings(BaseModel):
    """Constants for composition, collaboration, workload and health scoring."""

    model_config = ConfigDict(frozen=True)

    # Composition
    velocity_reference: float = Field(default=10.0, gt=0)
    lead_threshold: float = Field(default=9.0, ge=0, le=10)
    senior_threshold: float = Field(default=7.5, ge=0, le=10)
    mid_threshold: float = Field(default=5.5, ge=0, le=10)

    # Skill gaps
    overrepresented_ratio: float = Field(default=0.75, gt=0, le=1)
    overrepresented_min_team: int = Field(default=4, ge=2)
    required_skill_level: int = Field(default=8, ge=1, le=10)
    well_covered_holders: int = Field(default=3, ge=2)

    # Collaboration
    connector_threshold: int = Field(default=8, ge=1, le=10)
    connector_min_peers: int = Field(default=2, ge=1)
    isolated_threshold: int = Field(default=3, ge=1, le=10)
    scarcity_weight: float = Field(default=1.0, ge=0)
    max_pairings: int = Field(default=5, ge=0)

    # Workload
    hours_per_point: float = Field(default=4.0, gt=0)
    underutilized_ratio: float = Field(default=0.5, gt=0, le=1)
    max_concurrent_tasks: int = Field(default=5, ge=1)
    max_task_suggestions: int = Field(default=3, ge=0)

    # Recommendations
    pairing_benefit_cutoff: float = Field(default=6.0, ge=0)

    # Health
    coverage_weight: float = Field(default=0.4, ge=0, le=1)
    balance_weight: float = Field(default=0.3, ge=0, le=1)
    collaboration_weight: float = Field(default=0.3, ge=0, le=1)
    strength_threshold: float = Field(default=80.0, ge=0, le=100)
    risk_threshold: float = Field(default=50.0, ge=0, le=100)
    coverage_risk_threshold: float = Field(default=60.0, ge=0, le=100)
    low_velocity_points: int = Field(default=5, ge=0)
    low_velocity_share: float = Field(default=0.3, ge=0, le=1)
    min_team_size: int = Field(default=3, ge=1)
    high_quality_average: float = Field(default=8.0, ge=1, le=10)
    diverse_skill_count: int = Field(default=10, ge=0)
    trend_window: int = Field(default=3, ge=1)
    trend_change_pct: float = Field(default=10.0, ge=0)
    completion_risk_rate: float = Field(default=0.8, ge=0)
    default_requirements: tuple[str, ...] = ("Frontend", "Backend", "Testing", "DevOps", "Database")

    @model_validator(mode="after")
    def validate_ordering(self) -> OptimizerSettings:
        if not (self.mid_threshold <= self.senior_threshold <= self.lead_threshold):
            raise ValueError("Experience thresholds must satisfy mid <= senior <= lead")
        if self.isolated_threshold >= self.connector_threshold:
            raise ValueError("isolated_threshold must be below connector_threshold")
        total = self.coverage_weight + self.balance_weight + self.collaboration_weight
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Health weights must sum to 1.0, got {total:.2f}")
        return self


DEFAULT_SETTINGS = OptimizerSettings()


def settings_from_env(environ: Mapping[str, str] | None = None) -> OptimizerSettings:
    """Build settings from ``TEAM_OPTIMIZER_*`` variables over the defaults.

    ``TEAM_OPTIMIZER_DEFAULT_REQUIREMENTS`` is a comma separated list.

    Raises:
        ValueError: If an override cannot be parsed or violates a constraint.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}

    for name in OptimizerSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}", "")
        if not raw:
            continue
        if name == "default_requirements":
            overrides[name] = tuple(s.strip() for s in raw.split(",") if s.strip())
        else:
            overrides[name] = raw.strip()

    if not overrides:
        return DEFAULT_SETTINGS

    try:
        settings = OptimizerSettings(**overrides)
    except ValidationError as exc:
        raise ValueError(f"Invalid optimizer settings: {exc}") from exc

    logger.info("Optimizer settings overrides: %s", ", ".join(sorted(overrides)))
    return settings
