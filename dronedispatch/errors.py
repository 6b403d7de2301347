"""Mini README: Exception hierarchy shared by the dispatch engine.

Structure:
    * DispatchError - root of every error raised by the package.
    * ValidationError - malformed polygons, positions or bearings.
    * AllocationError - a greedy allocation round made no progress.

Infeasible legs and rejected flights are not exceptions; they surface as
empty path results or ``None`` flights so the allocator can move on.
"""

from __future__ import annotations

from typing import Sequence


class DispatchError(Exception):
    """Base class for dispatch engine failures."""


class ValidationError(DispatchError, ValueError):
    """Raised when input geometry or coordinates are malformed."""


class AllocationError(DispatchError):
    """Raised when some orders cannot be served by any remaining drone."""

    def __init__(self, message: str, unassigned: Sequence[int] = ()) -> None:
        super().__init__(message)
        self.unassigned = list(unassigned)
