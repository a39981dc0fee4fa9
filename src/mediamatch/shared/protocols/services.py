"""Service protocols for metadata collaborators.

The matching core depends only on these interfaces. Implementations
(network clients, caches) live outside the package and are passed in
at construction time. Every lookup is a blocking request-response call;
provider or network failures are raised as ``TransientLookupError``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mediamatch.core.models import (
        AudioTrack,
        Episode,
        MediaFile,
        Movie,
        SearchResult,
        SortOrder,
        SubtitleDescriptor,
    )


class EpisodeListProvider(Protocol):
    """Protocol for episode databases.

    Example:
        >>> provider: EpisodeListProvider = MyEpisodeClient()
        >>> results = provider.search("The Office", "en")
        >>> episodes = provider.fetch_episode_list(results[0], SortOrder.AIRED, "en")
    """

    name: str

    def search(self, query: str, locale: str) -> list[SearchResult]:
        """Search series identities by name.

        Raises:
            TransientLookupError: On provider or network failure
        """
        ...

    def fetch_episode_list(
        self,
        identity: SearchResult,
        sort_order: SortOrder,
        locale: str,
    ) -> list[Episode]:
        """Fetch all episodes of a series.

        Raises:
            TransientLookupError: On provider or network failure
        """
        ...


class MovieIdentificationService(Protocol):
    """Protocol for movie databases."""

    name: str

    def search_movie(self, query: str, locale: str) -> list[SearchResult]:
        """Search movie identities by name."""
        ...

    def get_movie(self, identity: SearchResult, locale: str) -> Movie:
        """Resolve a selected identity to a movie record."""
        ...

    def get_movie_by_imdb_id(self, imdb_id: str, locale: str) -> Movie | None:
        """Resolve an IMDb id (e.g. found in an NFO file)."""
        ...

    def lookup_by_hash(self, files: Sequence[MediaFile], locale: str) -> dict[MediaFile, Movie]:
        """Identify files by content hash; files not found are omitted."""
        ...


class MusicIdentificationService(Protocol):
    """Protocol for acoustic fingerprint services."""

    name: str

    def lookup(self, files: Sequence[MediaFile]) -> dict[MediaFile, AudioTrack | None]:
        """Identify audio files; unidentified files map to None or are omitted."""
        ...


class SubtitleProvider(Protocol):
    """Protocol for subtitle search services."""

    name: str

    def search(self, queries: Sequence[str], language: str) -> list[SubtitleDescriptor]:
        """Search subtitles for the given queries in one language."""
        ...
