"""Web module - HTTP API for the virtual timeline."""

from .app import create_app, run_dev_server

__all__ = [
    "create_app",
    "run_dev_server",
]
