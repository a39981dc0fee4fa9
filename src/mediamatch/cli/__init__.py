"""Command line interface for mediamatch."""

from .typer_app import app

__all__ = ["app"]
