"""Mini README: Interactive interfaces (HTTP) for the dispatch engine.

Exports the FastAPI application factory that serves the planning and
geometry endpoints. The command line entry point lives in
``main_dispatch_centre.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
