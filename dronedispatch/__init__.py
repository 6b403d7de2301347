"""Mini README: Core package initializer for the drone dispatch engine.

This module exposes the logging helper at package level. The file is kept
lightweight so importing the engine never pulls in the HTTP interface,
which is loaded on demand from ``dronedispatch.interface``.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
