"""Mini README: Centralised configuration models and helpers for dispatch.

Structure:
    * SelectionPolicy - how single-flight mode picks among feasible drones.
    * DispatchSettings - Pydantic model describing search and allocation limits.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` for process-wide defaults read from
    ``DRONEDISPATCH_*`` environment variables. Planning contexts accept an
    explicit ``DispatchSettings`` instance so tests and callers can tune the
    search budget per request without touching the environment.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class SelectionPolicy(str, Enum):
    """Single-flight drone selection strategies."""

    FIRST = "first"
    CHEAPEST = "cheapest"


class DispatchSettings(BaseSettings):
    """Runtime configuration for pathfinding and allocation."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ERROR).",
    )
    step_size: float = Field(
        0.00015,
        description="Length of one drone move in degrees; also the goal radius.",
        gt=0,
    )
    max_iterations: int = Field(
        100_000,
        description="Upper bound on A* node expansions for a single leg.",
        ge=1,
    )
    time_limit_seconds: float = Field(
        5.0,
        description="Wall-clock budget for a single A* search.",
        gt=0,
    )
    progress_log_interval: int = Field(
        10_000,
        description="Emit a debug progress line every N A* iterations.",
        ge=1,
    )
    max_allocation_rounds: int = Field(
        100,
        description="Upper bound on greedy allocation rounds per request.",
        ge=1,
    )
    selection_policy: SelectionPolicy = Field(
        SelectionPolicy.FIRST,
        description="Whether single-flight mode keeps the first or the cheapest feasible drone.",
    )
    enforce_max_cost: bool = Field(
        True,
        description="Reject flights whose per-order cost share exceeds the order's maxCost.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "DRONEDISPATCH_"
        env_file = ".env"
        case_sensitive = False

    @validator("selection_policy", pre=True)
    def _normalise_policy(cls, value: object) -> object:
        """Accept policy names regardless of casing or surrounding spaces."""

        if isinstance(value, str):
            return value.strip().lower()
        return value

    @validator("log_level")
    def _check_log_level(cls, value: str) -> str:
        """Store level names upper-cased and reject unknown ones."""

        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return name


@lru_cache()
def get_settings() -> DispatchSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return DispatchSettings()
