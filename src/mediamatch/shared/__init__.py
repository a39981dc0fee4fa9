"""mediamatch Shared Module.

This package contains shared constants, protocols, and error handling used across mediamatch.
"""

__all__ = ["constants", "errors", "logging", "protocols"]
