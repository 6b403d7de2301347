"""Mini README: Entry point CLI for the drone dispatch planner.

This script exposes a Typer CLI with two commands: ``serve`` starts the
FastAPI application with configurable host, port and production flags, and
``plan`` runs the planner once over a JSON request file (the same body the
HTTP planning endpoints accept) and prints the result. ``plan`` can merge
extra no-fly zones from a GeoJSON file into the request's fleet snapshot.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from pydantic import ValidationError as RequestValidationError

from dronedispatch.configuration import get_settings
from dronedispatch.dispatch import DispatchService
from dronedispatch.errors import DispatchError
from dronedispatch.interface.schemas import PlanRequest
from dronedispatch.logging_utils import configure_root_logger
from dronedispatch.utils.geojson import restricted_areas_from_geojson

cli = typer.Typer(help="Plan drone deliveries and serve the dispatch API.")


def _apply_log_level(log_level: Optional[str]) -> None:
    try:
        configure_root_logger(log_level)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--log-level") from error


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
    log_level: str = typer.Option(None, help="Override DRONEDISPATCH_LOG_LEVEL."),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    _apply_log_level(log_level)

    # 0.0.0.0 is a bind address only; browsers need a routable host.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting dispatch planner on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "dronedispatch.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
        log_level=(log_level or settings.log_level).lower(),
    )


@cli.command()
def plan(
    request_file: Path = typer.Argument(..., exists=True, readable=True, help="JSON plan request."),
    geojson: bool = typer.Option(False, help="Print a single-flight LineString instead of a plan."),
    no_fly_zones: Optional[Path] = typer.Option(
        None, exists=True, readable=True, help="GeoJSON polygons added as restricted areas."
    ),
    log_level: str = typer.Option(None, help="Override DRONEDISPATCH_LOG_LEVEL."),
) -> None:
    """Plan the orders in REQUEST_FILE and print the result as JSON."""

    _apply_log_level(log_level)
    service = DispatchService(get_settings())
    try:
        request = PlanRequest.model_validate(json.loads(request_file.read_text()))
        orders = request.to_records()
        snapshot = request.fleet.to_snapshot()
        if no_fly_zones is not None:
            snapshot.restricted_areas.extend(
                restricted_areas_from_geojson(no_fly_zones.read_text())
            )
    except (DispatchError, RequestValidationError, json.JSONDecodeError) as error:
        typer.echo(f"Invalid request: {error}", err=True)
        raise typer.Exit(code=2) from error

    if geojson:
        result = service.calc_delivery_path_geojson(orders, snapshot)
    else:
        result = service.calc_delivery_plan(orders, snapshot).as_dict()
    typer.echo(json.dumps(result, indent=2))


if __name__ == "__main__":
    cli()
