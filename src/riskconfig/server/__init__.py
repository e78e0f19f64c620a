"""Risk Configuration HTTP Server.

FastAPI-based HTTP interface over the in-memory configuration store.
"""

from .app import create_app, run_server

__all__ = ["create_app", "run_server"]
