"""Core matching components for mediamatch."""

from .models import (
    AudioTrack,
    Episode,
    Match,
    MatchReport,
    MediaFile,
    MediaKind,
    MediaMode,
    Movie,
    SearchResult,
    SortOrder,
    SubtitleDescriptor,
)
from .pipeline import MediaMatcher

__all__ = [
    "AudioTrack",
    "Episode",
    "Match",
    "MatchReport",
    "MediaFile",
    "MediaKind",
    "MediaMatcher",
    "MediaMode",
    "Movie",
    "SearchResult",
    "SortOrder",
    "SubtitleDescriptor",
]
