"""Mini README: Shared fixtures for the dispatch test-suite.

Provides explicit settings and an empty planning context so tests never
depend on environment variables or the cached process-wide settings.
"""

from __future__ import annotations

import pytest

from dronedispatch.configuration import DispatchSettings
from dronedispatch.context import PlanningContext


@pytest.fixture
def settings() -> DispatchSettings:
    return DispatchSettings(max_iterations=50_000, time_limit_seconds=30.0)


@pytest.fixture
def context(settings: DispatchSettings) -> PlanningContext:
    return PlanningContext(settings=settings)
