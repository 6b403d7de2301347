"""Mini README: Tests for the Typer command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from main_dispatch_centre import cli

RUNNER = CliRunner()

REQUEST = {
    "orders": [
        {
            "id": 7,
            "requirements": {"capacity": 1.0},
            "delivery": {"lng": -3.1858, "lat": 55.9449},
        }
    ],
    "fleet": {
        "drones": [
            {
                "id": 3,
                "origin": {"lng": -3.1863, "lat": 55.9447},
                "capability": {
                    "capacity": 4.0,
                    "maxMoves": 1500,
                    "costPerMove": 0.02,
                    "costInitial": 1.0,
                    "costFinal": 1.0,
                },
            }
        ]
    },
}


def _write_request(tmp_path: Path, payload: dict) -> Path:
    request_file = tmp_path / "request.json"
    request_file.write_text(json.dumps(payload))
    return request_file


def test_plan_prints_delivery_plan(tmp_path: Path) -> None:
    """The plan command emits the camelCase plan payload."""

    result = RUNNER.invoke(cli, ["plan", str(_write_request(tmp_path, REQUEST))])

    assert result.exit_code == 0, result.output
    plan = json.loads(result.stdout)
    assert plan["dronePaths"][0]["droneId"] == 3
    assert plan["dronePaths"][0]["deliveries"][0]["deliveryId"] == 7


def test_plan_geojson_flag_prints_line_string(tmp_path: Path) -> None:
    result = RUNNER.invoke(cli, ["plan", str(_write_request(tmp_path, REQUEST)), "--geojson"])

    assert result.exit_code == 0, result.output
    geometry = json.loads(result.stdout)
    assert geometry["type"] == "LineString"
    assert geometry["coordinates"][0] == [-3.1863, 55.9447]


def test_plan_rejects_out_of_range_coordinates(tmp_path: Path) -> None:
    payload = json.loads(json.dumps(REQUEST))
    payload["orders"][0]["delivery"]["lat"] = 95.0

    result = RUNNER.invoke(cli, ["plan", str(_write_request(tmp_path, payload))])

    assert result.exit_code == 2


def test_plan_rejects_malformed_request_file(tmp_path: Path) -> None:
    """Shape errors and broken JSON exit with the invalid-request code."""

    missing_fleet = _write_request(tmp_path, {"orders": REQUEST["orders"]})
    assert RUNNER.invoke(cli, ["plan", str(missing_fleet)]).exit_code == 2

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert RUNNER.invoke(cli, ["plan", str(broken)]).exit_code == 2


def test_plan_merges_geojson_no_fly_zones(tmp_path: Path) -> None:
    zone = tmp_path / "zones.geojson"
    ring = [[-3.1860, 55.9447], [-3.1856, 55.9447], [-3.1856, 55.9451], [-3.1860, 55.9451], [-3.1860, 55.9447]]
    zone.write_text(json.dumps({"type": "Polygon", "coordinates": [ring]}))

    result = RUNNER.invoke(
        cli, ["plan", str(_write_request(tmp_path, REQUEST)), "--no-fly-zones", str(zone)]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"totalCost": 0.0, "totalMoves": 0, "dronePaths": []}


def test_plan_rejects_unknown_log_level(tmp_path: Path) -> None:
    result = RUNNER.invoke(
        cli, ["plan", str(_write_request(tmp_path, REQUEST)), "--log-level", "loud"]
    )
    assert result.exit_code == 2
