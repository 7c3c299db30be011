"""HTTP API for resumatch."""

from .app import create_app

__all__ = ["create_app"]
