"""Utility helpers for mediamatch."""

from .files import discover_files, safe_read_text

__all__ = ["discover_files", "safe_read_text"]
