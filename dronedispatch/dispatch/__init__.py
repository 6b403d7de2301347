"""Mini README: Dispatch subsystem turning order batches into flight plans.

The package is divided into ``flights`` for single round-trip construction,
``allocator`` for greedy multi-drone packing, ``plans`` for the output
records and ``service`` for the request-level entry points used by the HTTP
layer and the command line.
"""

from .allocator import Allocation, Allocator, SingleFlightSelection
from .flights import Flight, FlightBuilder, FlightEvaluation, RejectionReason
from .plans import (
    DeliveryPath,
    DeliveryPlan,
    DronePath,
    assemble_plan,
    flight_to_line_string,
    slice_flight,
)
from .service import DispatchService, DroneRecord, FleetSnapshot

__all__ = [
    "Allocation",
    "Allocator",
    "DeliveryPath",
    "DeliveryPlan",
    "DispatchService",
    "DronePath",
    "DroneRecord",
    "FleetSnapshot",
    "Flight",
    "FlightBuilder",
    "FlightEvaluation",
    "RejectionReason",
    "SingleFlightSelection",
    "assemble_plan",
    "flight_to_line_string",
    "slice_flight",
]
