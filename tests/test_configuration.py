"""Mini README: Tests for environment-driven dispatch settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as SettingsValidationError

from dronedispatch.configuration import DispatchSettings, SelectionPolicy


def test_defaults_match_move_model() -> None:
    settings = DispatchSettings()
    assert settings.step_size == 0.00015
    assert settings.selection_policy is SelectionPolicy.FIRST
    assert settings.enforce_max_cost is True


def test_environment_overrides_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DRONEDISPATCH_MAX_ITERATIONS", "250")
    monkeypatch.setenv("DRONEDISPATCH_SELECTION_POLICY", " Cheapest ")

    settings = DispatchSettings()

    assert settings.max_iterations == 250
    assert settings.selection_policy is SelectionPolicy.CHEAPEST


def test_non_positive_step_is_rejected() -> None:
    with pytest.raises(SettingsValidationError):
        DispatchSettings(step_size=0)


def test_log_level_is_normalised_and_checked() -> None:
    assert DispatchSettings(log_level=" debug ").log_level == "DEBUG"
    with pytest.raises(SettingsValidationError):
        DispatchSettings(log_level="chatty")
