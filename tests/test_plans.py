"""Mini README: Tests for plan assembly and LineString rendering.

Ensures per-order segments are cut at hover markers, totals carry over from
the allocation and empty selections render as empty geometries.
"""

from __future__ import annotations

from dronedispatch.context import PlanningContext
from dronedispatch.dispatch import (
    Allocation,
    FlightBuilder,
    assemble_plan,
    flight_to_line_string,
    slice_flight,
)

from factories import ORIGIN, make_capability, make_order, offset


def _two_order_flight(context: PlanningContext):
    orders = [make_order(11, offset(ORIGIN, 0.0006, 0.0)), make_order(12, offset(ORIGIN, 0.0006, 0.0006))]
    flight = FlightBuilder(context).build(ORIGIN, make_capability(), orders)
    assert flight is not None
    return flight


def test_slice_flight_cuts_at_hover_indices(context: PlanningContext) -> None:
    flight = _two_order_flight(context)

    first, second = slice_flight(flight)

    assert first.delivery_id == 11
    assert first.flight_path[0] == ORIGIN
    assert first.flight_path[-1] == flight.orders[0].delivery
    assert first.flight_path[-2] == flight.orders[0].delivery
    assert second.flight_path[0] == flight.orders[0].delivery
    assert second.flight_path[-1] == ORIGIN
    assert len(first.flight_path) + len(second.flight_path) == len(flight.path) + 1


def test_assemble_plan_exports_api_shape(context: PlanningContext) -> None:
    flight = _two_order_flight(context)
    home_flight = FlightBuilder(context).build(ORIGIN, make_capability(), [make_order(13, ORIGIN)])
    allocation = Allocation()
    allocation.add_flight(4, flight)
    allocation.add_flight(4, home_flight)

    payload = assemble_plan(allocation).as_dict()

    assert payload["totalCost"] == flight.cost + home_flight.cost
    assert payload["totalMoves"] == flight.moves
    (drone_path,) = payload["dronePaths"]
    assert drone_path["droneId"] == 4
    assert [delivery["deliveryId"] for delivery in drone_path["deliveries"]] == [11, 12, 13]
    assert drone_path["deliveries"][2]["flightPath"] == [ORIGIN.as_dict()] * 2
    assert drone_path["deliveries"][0]["flightPath"][0] == {"lng": ORIGIN.lng, "lat": ORIGIN.lat}


def test_empty_allocation_gives_empty_plan() -> None:
    plan = assemble_plan(Allocation())
    assert plan.as_dict() == {"totalCost": 0.0, "totalMoves": 0, "dronePaths": []}


def test_line_string_flattens_flight(context: PlanningContext) -> None:
    flight = _two_order_flight(context)

    geojson = flight_to_line_string(flight)

    assert geojson["type"] == "LineString"
    assert len(geojson["coordinates"]) == len(flight.path)
    assert geojson["coordinates"][0] == [ORIGIN.lng, ORIGIN.lat]


def test_line_string_without_flight_is_empty() -> None:
    assert flight_to_line_string(None) == {"type": "LineString", "coordinates": []}
