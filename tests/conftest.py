"""
Pytest configuration and shared fixtures for mediamatch tests.

Fake collaborators implement the service protocols in memory so the
matching pipeline can be exercised without any network access.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest

from mediamatch.config import Settings
from mediamatch.core.models import (
    AudioTrack,
    Episode,
    MediaFile,
    Movie,
    SearchResult,
    SortOrder,
    SubtitleDescriptor,
)
from mediamatch.shared.errors import create_lookup_error


class FakeEpisodeProvider:
    """In-memory episode database."""

    name = "fake-episodes"

    def __init__(self, catalog: dict[SearchResult, list[Episode]]) -> None:
        self.catalog = catalog
        self.search_calls: list[str] = []
        self.fetch_calls: list[SearchResult] = []
        self.failing_queries: set[str] = set()

    def search(self, query: str, locale: str) -> list[SearchResult]:
        self.search_calls.append(query)
        if query in self.failing_queries:
            raise create_lookup_error("provider unavailable", provider=self.name)
        words = query.lower().split()
        return [r for r in self.catalog if any(w in r.name.lower() for w in words)]

    def fetch_episode_list(
        self,
        identity: SearchResult,
        sort_order: SortOrder,
        locale: str,
    ) -> list[Episode]:
        self.fetch_calls.append(identity)
        return list(self.catalog.get(identity, []))


class FakeMovieService:
    """In-memory movie database."""

    name = "fake-movies"

    def __init__(
        self,
        movies: dict[SearchResult, Movie],
        by_imdb: dict[str, Movie] | None = None,
        by_hash: dict[str, Movie] | None = None,
    ) -> None:
        self.movies = movies
        self.by_imdb = by_imdb or {}
        self.by_hash = by_hash or {}
        self.search_calls: list[str] = []

    def search_movie(self, query: str, locale: str) -> list[SearchResult]:
        self.search_calls.append(query)
        words = query.lower().split()
        return [r for r in self.movies if all(w in r.name.lower() for w in words)]

    def get_movie(self, identity: SearchResult, locale: str) -> Movie:
        return self.movies[identity]

    def get_movie_by_imdb_id(self, imdb_id: str, locale: str) -> Movie | None:
        return self.by_imdb.get(imdb_id)

    def lookup_by_hash(self, files: Sequence[MediaFile], locale: str) -> dict[MediaFile, Movie]:
        return {f: self.by_hash[f.name] for f in files if f.name in self.by_hash}


class FakeMusicService:
    """Fingerprint service keyed by file name."""

    name = "fake-music"

    def __init__(self, tracks: dict[str, AudioTrack], *, fail: bool = False) -> None:
        self.tracks = tracks
        self.fail = fail

    def lookup(self, files: Sequence[MediaFile]) -> dict[MediaFile, AudioTrack | None]:
        if self.fail:
            raise create_lookup_error("fingerprint service down", provider=self.name)
        return {f: self.tracks.get(f.name) for f in files}


class FakeSubtitleProvider:
    """Subtitle provider returning fixed descriptors."""

    def __init__(self, name: str, descriptors: list[SubtitleDescriptor], *, fail: bool = False) -> None:
        self.name = name
        self.descriptors = descriptors
        self.fail = fail
        self.calls = 0

    def search(self, queries: Sequence[str], language: str) -> list[SubtitleDescriptor]:
        self.calls += 1
        if self.fail:
            raise create_lookup_error("subtitle provider down", provider=self.name)
        return [d for d in self.descriptors if d.language == language]


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any config file on disk."""
    return Settings()


@pytest.fixture
def make_file() -> Callable[..., MediaFile]:
    """Factory building MediaFile objects under a fake library root."""

    def _make(name: str, folder: str = "library") -> MediaFile:
        return MediaFile(path=Path("/media") / folder / name)

    return _make


@pytest.fixture
def office_us() -> SearchResult:
    return SearchResult(id=73244, name="The Office (US)", year=2005)


@pytest.fixture
def office_episodes() -> list[Episode]:
    return [
        Episode("The Office (US)", 1, 1, "Pilot", series_id=73244),
        Episode("The Office (US)", 1, 2, "Diversity Day", series_id=73244),
        Episode("The Office (US)", 1, 3, "Health Care", series_id=73244),
        Episode("The Office (US)", 2, 1, "The Dundies", series_id=73244),
    ]


@pytest.fixture
def episode_provider(office_us: SearchResult, office_episodes: list[Episode]) -> FakeEpisodeProvider:
    breaking_bad = SearchResult(id=81189, name="Breaking Bad", year=2008)
    return FakeEpisodeProvider(
        {
            office_us: office_episodes,
            breaking_bad: [
                Episode("Breaking Bad", 1, 1, "Pilot", series_id=81189),
                Episode("Breaking Bad", 1, 2, "Cat's in the Bag...", series_id=81189),
            ],
        }
    )


@pytest.fixture
def movie_service_cls() -> type[FakeMovieService]:
    return FakeMovieService


@pytest.fixture
def music_service_cls() -> type[FakeMusicService]:
    return FakeMusicService


@pytest.fixture
def subtitle_provider_cls() -> type[FakeSubtitleProvider]:
    return FakeSubtitleProvider


@pytest.fixture
def episode_provider_cls() -> type[FakeEpisodeProvider]:
    return FakeEpisodeProvider


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger("mediamatch")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
