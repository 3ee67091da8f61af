"""Mini README: Web interface for the tracker.

Exports the FastAPI application factory that serves the ledger as JSON
to a browser client.
"""

from .web_app import create_application

__all__ = ["create_application"]
