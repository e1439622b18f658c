"""HTTP adapter exposing the conversion pipeline."""

from .app import create_app

__all__ = ["create_app"]
