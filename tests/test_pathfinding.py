"""Mini README: Tests for the A* pathfinder.

Checks the trivial and blocked shortcuts, detours around restricted areas,
budget exhaustion and the per-context path cache.
"""

from __future__ import annotations

import itertools

import pytest

from dronedispatch.configuration import DispatchSettings
from dronedispatch.context import PlanningContext
from dronedispatch.geometry import STEP_SIZE, Position, distance
from dronedispatch.pathfinding import Pathfinder, SearchOutcome, count_moves, find_path, grid_key
from dronedispatch.pathfinding import astar

from factories import ORIGIN, box_around, offset, rectangle


def _assert_valid_path(context: PlanningContext, path, origin: Position, target: Position) -> None:
    assert path[0] == origin
    assert path[-1] == target
    for previous, current in zip(path, path[1:]):
        assert distance(previous, current) <= STEP_SIZE + 1e-12
        assert not context.is_restricted(current)
        assert not context.crosses_restricted(previous, current)


def test_count_moves_ignores_hovers() -> None:
    a, b, c = ORIGIN, offset(ORIGIN, STEP_SIZE, 0), offset(ORIGIN, 2 * STEP_SIZE, 0)
    assert count_moves([a, a, b, b, c]) == 2
    assert count_moves([a]) == 0
    assert count_moves([]) == 0


def test_grid_key_rounds_to_nearest_step() -> None:
    nudged = Position(ORIGIN.lng + STEP_SIZE * 0.2, ORIGIN.lat - STEP_SIZE * 0.3)
    assert grid_key(nudged, STEP_SIZE) == grid_key(ORIGIN, STEP_SIZE)
    assert grid_key(offset(ORIGIN, STEP_SIZE, 0), STEP_SIZE) != grid_key(ORIGIN, STEP_SIZE)


def test_close_target_returns_single_node_path(context: PlanningContext) -> None:
    target = offset(ORIGIN, STEP_SIZE / 2, 0)
    result = find_path(context, ORIGIN, target)
    assert result.positions == (ORIGIN,)
    assert result.move_count == 0
    assert result.outcome is SearchOutcome.ALREADY_CLOSE


def test_close_target_behind_thin_wall_is_routed_around(settings: DispatchSettings) -> None:
    """A target under one step away still needs a detour when a wall sits between."""

    target = offset(ORIGIN, 0.0001, 0)
    wall = rectangle("wall", ORIGIN.lng + 0.00004, ORIGIN.lat - 0.0003, ORIGIN.lng + 0.00006, ORIGIN.lat + 0.0003)
    context = PlanningContext(restricted_areas=[wall], settings=settings)

    result = find_path(context, ORIGIN, target)

    assert result.outcome is SearchOutcome.FOUND
    assert result.move_count > 1
    _assert_valid_path(context, result.positions, ORIGIN, target)


def test_target_inside_restricted_area_returns_empty_path(settings: DispatchSettings) -> None:
    target = offset(ORIGIN, 0.001, 0)
    context = PlanningContext(restricted_areas=[box_around(target, 0.0003)], settings=settings)
    result = find_path(context, ORIGIN, target)
    assert not result.found
    assert result.positions == ()
    assert result.outcome is SearchOutcome.BLOCKED_ENDPOINT


def test_origin_inside_restricted_area_returns_empty_path(settings: DispatchSettings) -> None:
    context = PlanningContext(restricted_areas=[box_around(ORIGIN, 0.0003)], settings=settings)
    result = find_path(context, ORIGIN, offset(ORIGIN, 0.001, 0))
    assert not result.found


def test_open_sky_path_reaches_target(context: PlanningContext) -> None:
    target = offset(ORIGIN, 0.0012, -0.0007)
    result = find_path(context, ORIGIN, target)
    assert result.found
    assert result.outcome is SearchOutcome.FOUND
    assert result.move_count * STEP_SIZE >= distance(ORIGIN, target)
    _assert_valid_path(context, result.positions, ORIGIN, target)


def test_path_detours_around_wall(settings: DispatchSettings) -> None:
    origin = Position(-3.1900, 55.9440)
    target = Position(-3.1880, 55.9440)
    wall = rectangle("wall", -3.1891, 55.9430, -3.1889, 55.9450)
    context = PlanningContext(restricted_areas=[wall], settings=settings)

    result = Pathfinder(context).find_path(origin, target)

    assert result.found
    _assert_valid_path(context, result.positions, origin, target)
    # the straight line is blocked, so the detour is longer than it
    assert result.move_count * STEP_SIZE > distance(origin, target) + 0.0005


def test_enclosed_origin_exhausts_frontier(settings: DispatchSettings) -> None:
    inner, outer = 0.0006, 0.0008
    x, y = ORIGIN.lng, ORIGIN.lat
    walls = [
        rectangle("west", x - outer, y - outer, x - inner, y + outer),
        rectangle("east", x + inner, y - outer, x + outer, y + outer),
        rectangle("south", x - outer, y - outer, x + outer, y - inner),
        rectangle("north", x - outer, y + inner, x + outer, y + outer),
    ]
    context = PlanningContext(restricted_areas=walls, settings=settings)

    result = find_path(context, ORIGIN, offset(ORIGIN, 0.003, 0.003))

    assert not result.found
    assert result.outcome is SearchOutcome.EXHAUSTED


def test_iteration_cap_returns_empty_path() -> None:
    context = PlanningContext(settings=DispatchSettings(max_iterations=1))
    result = find_path(context, ORIGIN, offset(ORIGIN, 0.01, 0.01))
    assert not result.found
    assert result.outcome is SearchOutcome.ITERATION_LIMIT
    assert result.iterations == 1


def test_time_budget_returns_empty_path(monkeypatch: pytest.MonkeyPatch) -> None:
    ticks = itertools.count(step=10)
    monkeypatch.setattr(astar.time, "monotonic", lambda: float(next(ticks)))
    context = PlanningContext(settings=DispatchSettings(time_limit_seconds=5.0))

    result = find_path(context, ORIGIN, offset(ORIGIN, 0.01, 0.01))

    assert not result.found
    assert result.outcome is SearchOutcome.TIMEOUT


def test_results_are_cached_per_context(settings: DispatchSettings) -> None:
    target = offset(ORIGIN, 0.0009, 0.0003)
    context = PlanningContext(settings=settings)
    pathfinder = Pathfinder(context)

    first = pathfinder.find_path(ORIGIN, target)
    second = pathfinder.find_path(ORIGIN, target)

    assert first is second
    assert context.cached_path_count == 1
    fresh = PlanningContext(settings=settings)
    assert fresh.cached_path(ORIGIN, target) is None
