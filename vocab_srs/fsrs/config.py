"""
Scheduler configuration.

Preset interval tables and interval-solve bounds are configuration, not
magic numbers. SchedulerConfig is a frozen pydantic model so a config can be
validated once and shared.

Environment overrides (read by load_config, after loading a .env file):
    FSRS_TARGET_RETENTION       e.g. 0.9
    FSRS_MAX_INTERVAL_DAYS      e.g. 3650
    FSRS_MIN_INTERVAL_DAYS      e.g. 0.000694
    FSRS_SCALE_BY_DIFFICULTY    true/false
    FSRS_BEHAVIOR_MODIFIERS     comma separated modifier names
"""

from __future__ import annotations

import os
from datetime import timedelta

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vocab_srs.fsrs.constants import (
    MAX_INTERVAL_DAYS,
    MIN_INTERVAL_DAYS,
    TARGET_RETENTION,
    Rating,
)


class PresetIntervals(BaseModel):
    """Fixed interval per rating for one pre-review phase."""
    model_config = ConfigDict(frozen=True)

    again: timedelta = Field(..., description="Interval after Again")
    hard: timedelta = Field(..., description="Interval after Hard")
    good: timedelta = Field(..., description="Interval after Good")
    easy: timedelta = Field(..., description="Interval after Easy")

    @model_validator(mode="after")
    def _check_positive(self) -> "PresetIntervals":
        for name in ("again", "hard", "good", "easy"):
            if getattr(self, name) <= timedelta(0):
                raise ValueError(f"preset interval '{name}' must be positive")
        return self

    def for_rating(self, rating: Rating) -> timedelta:
        return getattr(self, rating.name.lower())


LEARNING_INTERVALS = PresetIntervals(
    again=timedelta(minutes=1),
    hard=timedelta(minutes=5),
    good=timedelta(minutes=10),
    easy=timedelta(days=2),  # Skip straight to review
)

TRANSITION_INTERVALS = PresetIntervals(
    again=timedelta(minutes=5),
    hard=timedelta(minutes=30),
    good=timedelta(days=1),
    easy=timedelta(days=2),
)


class SchedulerConfig(BaseModel):
    """All tunable scheduler parameters."""
    model_config = ConfigDict(frozen=True)

    target_retention: float = Field(
        TARGET_RETENTION, gt=0.0, lt=1.0,
        description="Recall probability at which the next review is scheduled"
    )
    max_interval_days: float = Field(MAX_INTERVAL_DAYS, gt=0.0)
    min_interval_days: float = Field(MIN_INTERVAL_DAYS, gt=0.0)

    learning: PresetIntervals = LEARNING_INTERVALS
    transition: PresetIntervals = TRANSITION_INTERVALS
    relearn_interval: timedelta = Field(
        timedelta(minutes=10),
        description="Interval after a lapse (Again while in REVIEW)"
    )

    scale_by_difficulty: bool = Field(
        False,
        description="Multiply stability growth by (11 - D) / 10"
    )
    behavior_modifiers: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Names of behaviour modifiers, applied left to right"
    )

    @field_validator("behavior_modifiers")
    @classmethod
    def _known_modifiers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # Imported here: modifiers depends on memory_state, not on config
        from vocab_srs.fsrs.modifiers import MODIFIERS

        unknown = [name for name in value if name not in MODIFIERS]
        if unknown:
            raise ValueError(
                f"Unknown behavior modifiers {unknown}; available: {sorted(MODIFIERS)}"
            )
        return value

    @model_validator(mode="after")
    def _check_bounds(self) -> "SchedulerConfig":
        if self.min_interval_days > self.max_interval_days:
            raise ValueError("min_interval_days must not exceed max_interval_days")
        if self.relearn_interval <= timedelta(0):
            raise ValueError("relearn_interval must be positive")
        return self


DEFAULT_CONFIG = SchedulerConfig()


def load_config() -> SchedulerConfig:
    """
    Build a SchedulerConfig from FSRS_* environment variables.

    Unset variables keep their defaults.

    Raises:
        pydantic.ValidationError: a variable holds an invalid value
    """
    load_dotenv()

    overrides: dict = {}
    if os.getenv("FSRS_TARGET_RETENTION"):
        overrides["target_retention"] = os.getenv("FSRS_TARGET_RETENTION")
    if os.getenv("FSRS_MAX_INTERVAL_DAYS"):
        overrides["max_interval_days"] = os.getenv("FSRS_MAX_INTERVAL_DAYS")
    if os.getenv("FSRS_MIN_INTERVAL_DAYS"):
        overrides["min_interval_days"] = os.getenv("FSRS_MIN_INTERVAL_DAYS")
    if os.getenv("FSRS_SCALE_BY_DIFFICULTY"):
        overrides["scale_by_difficulty"] = (
            os.getenv("FSRS_SCALE_BY_DIFFICULTY", "false").lower() == "true"
        )
    modifiers = os.getenv("FSRS_BEHAVIOR_MODIFIERS", "")
    if modifiers.strip():
        overrides["behavior_modifiers"] = tuple(
            name.strip() for name in modifiers.split(",") if name.strip()
        )

    return SchedulerConfig(**overrides)
