"""Mini README: FastAPI service exposing the dispatch engine.

Structure:
    * create_application - application factory wiring routes and handlers.

Routes live under ``/api/v1``. The planning endpoints take the orders and
the already-fetched fleet snapshot in the request body; the service never
reaches out for drone or geofence data itself. Every request builds its own
planning context, so concurrent requests never share path caches.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from ..configuration import DispatchSettings, get_settings
from ..dispatch import DispatchService
from ..errors import ValidationError
from ..geometry import distance, is_close, is_in_region, next_position
from ..logging_utils import get_logger
from .schemas import PairRequest, PlanRequest, RegionQuery, StepRequest

LOGGER = get_logger(__name__)


def create_application(settings: Optional[DispatchSettings] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    app = FastAPI(title="Drone Dispatch Planner", version="0.1.0")
    service = DispatchService(settings)
    router = APIRouter(prefix="/api/v1")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, error: ValidationError) -> JSONResponse:
        LOGGER.info("Rejected %s %s: %s", request.method, request.url.path, error)
        return JSONResponse(status_code=400, content={"detail": str(error)})

    @router.get("/health")
    async def health() -> Dict[str, str]:
        """Report liveness and the configured environment."""

        return {"status": "ok", "environment": settings.environment}

    @router.post("/distanceTo")
    async def distance_to(body: PairRequest) -> float:
        return distance(body.position1.to_position(), body.position2.to_position())

    @router.post("/isCloseTo")
    async def is_close_to(body: PairRequest) -> bool:
        return is_close(
            body.position1.to_position(), body.position2.to_position(), settings.step_size
        )

    @router.post("/nextPosition")
    async def next_position_route(body: StepRequest) -> Dict[str, float]:
        position = next_position(body.start.to_position(), body.angle, settings.step_size)
        return position.as_dict()

    @router.post("/isInRegion")
    async def is_in_region_route(body: RegionQuery) -> bool:
        vertices = [vertex.to_position() for vertex in body.region.vertices]
        return is_in_region(body.position.to_position(), vertices)

    # Planning is CPU-bound, so these handlers are sync and run in the threadpool.
    @router.post("/calcDeliveryPath")
    def calc_delivery_path(body: PlanRequest) -> JSONResponse:
        """Allocate the orders across the fleet and return the delivery plan."""

        plan = service.calc_delivery_plan(body.to_records(), body.fleet.to_snapshot())
        return JSONResponse(plan.as_dict())

    @router.post("/calcDeliveryPathAsGeoJson")
    def calc_delivery_path_as_geojson(body: PlanRequest) -> JSONResponse:
        """Return one drone's consolidated flight as a GeoJSON LineString."""

        geojson = service.calc_delivery_path_geojson(body.to_records(), body.fleet.to_snapshot())
        LOGGER.info("Returning LineString with %s coordinates", len(geojson["coordinates"]))
        return JSONResponse(geojson)

    app.include_router(router)
    return app
