"""
Data models for mediamatch core operations.

This module defines the input files, the identities returned by
metadata providers and the candidate records a file is matched to.
Candidates are a tagged variant (``Episode | Movie | AudioTrack``):
each is a frozen dataclass with a ``kind`` tag, a ``display_name`` and
a ``clone()`` value copy.
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from mediamatch.core.naming import strip_release_info
from mediamatch.shared.constants.file_formats import (
    ArchiveFormats,
    AudioFormats,
    MetadataFormats,
    SubtitleFormats,
    VideoFormats,
)


class MediaKind(str, Enum):
    """Kinds of files recognized by extension."""

    VIDEO = "video"
    SUBTITLE = "subtitle"
    AUDIO = "audio"
    ARCHIVE = "archive"
    NFO = "nfo"
    OTHER = "other"


class MediaMode(str, Enum):
    """Matching mode for a batch of files."""

    EPISODE = "episode"
    MOVIE = "movie"
    MUSIC = "music"


class SortOrder(str, Enum):
    """Episode ordering requested from an episode provider."""

    AIRED = "aired"
    DVD = "dvd"
    ABSOLUTE = "absolute"


_KIND_BY_EXTENSION: dict[str, MediaKind] = {
    **{ext: MediaKind.VIDEO for ext in VideoFormats.EXTENSIONS},
    **{ext: MediaKind.SUBTITLE for ext in SubtitleFormats.EXTENSIONS},
    **{ext: MediaKind.AUDIO for ext in AudioFormats.EXTENSIONS},
    **{ext: MediaKind.ARCHIVE for ext in ArchiveFormats.EXTENSIONS},
    **{ext: MediaKind.NFO for ext in MetadataFormats.NFO_EXTENSIONS},
}


class MediaFile(BaseModel):
    """
    A discovered media file.

    Immutable; identity is the path. Everything else is derived from it.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Path of the file")

    @classmethod
    def of(cls, path: str | Path) -> MediaFile:
        """Build a MediaFile from a path-like value."""
        return cls(path=Path(path))

    @property
    def parent(self) -> Path:
        return self.path.parent

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extension(self) -> str:
        """Lower-cased extension including the dot."""
        return self.path.suffix.lower()

    @property
    def base_name(self) -> str:
        """Stem with release information removed."""
        return strip_release_info(self.stem)

    @property
    def kind(self) -> MediaKind:
        return _KIND_BY_EXTENSION.get(self.extension, MediaKind.OTHER)

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return str(self.path)


@dataclass(frozen=True, eq=False)
class SearchResult:
    """An identity returned by a metadata provider search.

    Equality and hashing use the provider id (and kind) only.

    Attributes:
        id: Provider-specific identifier
        name: Display name used for similarity ranking
        kind: Identity kind, e.g. "series", "movie" or "track"
        year: Optional first air / release year
        aliases: Alternative names, also considered when ranking
    """

    id: str | int
    name: str
    kind: str = "series"
    year: int | None = None
    aliases: tuple[str, ...] = ()

    @property
    def effective_names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return (self.kind, self.id) == (other.kind, other.id)

    def __hash__(self) -> int:
        return hash((self.kind, self.id))

    def __str__(self) -> str:
        return f"{self.name} ({self.year})" if self.year else self.name


class _CloneMixin:
    def clone(self: Any) -> Any:
        """Return a deep value copy, equal to but distinct from ``self``."""
        return copy.deepcopy(self)


@dataclass(frozen=True)
class Episode(_CloneMixin):
    """A single episode of a series."""

    series_name: str
    season: int | None
    episode: int | None
    title: str = ""
    series_id: str | int | None = None
    airdate: date | None = None
    absolute: int | None = None
    kind: Literal["episode"] = field(default="episode", init=False)

    @property
    def season_episode(self) -> tuple[int, int] | None:
        if self.season is None or self.episode is None:
            return None
        return (self.season, self.episode)

    @property
    def display_name(self) -> str:
        parts = [self.series_name]
        if self.season_episode is not None:
            parts.append(f"S{self.season:02d}E{self.episode:02d}")
        elif self.absolute is not None:
            parts.append(f"{self.absolute:02d}")
        if self.title:
            parts.append(self.title)
        return " - ".join(parts)


@dataclass(frozen=True)
class Movie(_CloneMixin):
    """A movie, optionally one part of a multi-part release."""

    name: str
    year: int | None = None
    movie_id: str | int | None = None
    imdb_id: str | None = None
    part: int | None = None
    part_count: int | None = None
    kind: Literal["movie"] = field(default="movie", init=False)

    def with_part(self, index: int, total: int) -> Movie:
        """Return a copy numbered as part ``index`` of ``total``."""
        return dataclasses.replace(self, part=index, part_count=total)

    @property
    def display_name(self) -> str:
        text = f"{self.name} ({self.year})" if self.year else self.name
        if self.part is not None and self.part_count:
            text += f" CD{self.part}"
        return text


@dataclass(frozen=True)
class AudioTrack(_CloneMixin):
    """A music track."""

    artist: str
    title: str
    album: str | None = None
    track_id: str | int | None = None
    kind: Literal["audio"] = field(default="audio", init=False)

    @property
    def display_name(self) -> str:
        return f"{self.artist} - {self.title}"


@dataclass(frozen=True)
class SubtitleDescriptor(_CloneMixin):
    """A subtitle search hit offered by a subtitle provider."""

    name: str
    language: str
    provider: str
    download_ref: str | None = None
    kind: Literal["subtitle"] = field(default="subtitle", init=False)

    @property
    def display_name(self) -> str:
        return self.name


Candidate = Union[Episode, Movie, AudioTrack]


@dataclass(frozen=True)
class Match:
    """A file and what it was matched to.

    ``candidate`` is None for a file that could not be resolved.
    """

    file: MediaFile
    candidate: Candidate | SubtitleDescriptor | None
    score: float = 0.0

    @property
    def is_resolved(self) -> bool:
        return self.candidate is not None


@dataclass
class MatchReport:
    """Result of an entry point: matches plus every unresolved file.

    Both lists follow the original input order.
    """

    matches: list[Match] = field(default_factory=list)
    unmatched: list[MediaFile] = field(default_factory=list)

    def candidate_for(self, file: MediaFile) -> Candidate | SubtitleDescriptor | None:
        for match in self.matches:
            if match.file == file:
                return match.candidate
        return None

    def to_dict(self) -> dict[str, object]:
        """Convert report to a JSON-friendly dictionary."""
        return {
            "matches": [
                {
                    "file": str(m.file.path),
                    "candidate": m.candidate.display_name if m.candidate else None,
                    "kind": m.candidate.kind if m.candidate else None,
                    "score": m.score,
                }
                for m in self.matches
            ],
            "unmatched": [str(f.path) for f in self.unmatched],
        }
