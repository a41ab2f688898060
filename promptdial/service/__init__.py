"""HTTP service mode for promptdial."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
