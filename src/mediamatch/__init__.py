"""mediamatch: media file matching and disambiguation.

Matches noisy media file names (episodes, movies, music) against
metadata candidates supplied by external providers.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
