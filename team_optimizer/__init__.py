"""Team composition and optimization analysis engine."""

from .models import Developer, DeveloperProfile, SprintRecord, Task
from .optimizer import (
    TeamOptimizationAnalysis,
    analyze_team,
    calculate_team_health,
    skill_gap_details,
)
from .settings import OptimizerSettings, settings_from_env
from .validation import InvalidInputError

__all__ = [
    "Developer",
    "DeveloperProfile",
    "InvalidInputError",
    "OptimizerSettings",
    "SprintRecord",
    "Task",
    "TeamOptimizationAnalysis",
    "analyze_team",
    "calculate_team_health",
    "settings_from_env",
    "skill_gap_details",
]
