"""Protocol interfaces for collaborators consumed by the matching core."""

from .services import (
    EpisodeListProvider,
    MovieIdentificationService,
    MusicIdentificationService,
    SubtitleProvider,
)

__all__ = [
    "EpisodeListProvider",
    "MovieIdentificationService",
    "MusicIdentificationService",
    "SubtitleProvider",
]
