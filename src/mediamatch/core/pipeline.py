"""Matching entry points.

``MediaMatcher`` ties the components together for each media mode:

    files -> BatchGrouper -> provider search -> CandidateSelector
          -> provider fetch -> EpisodeMatcher -> DerivedFileLinker

Groups are resolved independently and may be dispatched to a thread
pool; their results are buffered and reassembled in input order. A group
either resolves fully or contributes no matches. Strict-mode ambiguity
aborts the whole call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from mediamatch.config.models.settings import Settings
from mediamatch.core.derived_linker import DerivedFileLinker
from mediamatch.core.file_grouper.grouper import BatchGrouper
from mediamatch.core.file_grouper.models import Group
from mediamatch.core.matching.episode_matcher import EpisodeMatcher
from mediamatch.core.matching.selector import CandidateSelector
from mediamatch.core.models import (
    Episode,
    Match,
    MatchReport,
    MediaFile,
    MediaKind,
    MediaMode,
    Movie,
    SearchResult,
    SortOrder,
)
from mediamatch.core.naming import extract_year, is_clutter, release_tokens
from mediamatch.core.series_name_matcher import SeriesNameMatcher
from mediamatch.core.statistics import MatchingStatistics
from mediamatch.shared.constants.filename_patterns import IMDB_ID_PATTERN
from mediamatch.shared.errors import (
    AmbiguousMatchError,
    AmbiguousSelectionError,
    ApplicationError,
    ErrorCode,
    ErrorContext,
    InvalidQueryError,
    MediaMatchError,
    NoMatchError,
    TransientLookupError,
    create_ambiguous_selection_error,
    create_invalid_query_error,
)
from mediamatch.shared.logging import log_operation_error, log_operation_success
from mediamatch.shared.protocols.services import (
    EpisodeListProvider,
    MovieIdentificationService,
    MusicIdentificationService,
)
from mediamatch.utils.files import safe_read_text

logger = logging.getLogger(__name__)

EpisodeFilter = Callable[[Episode], bool]

T = TypeVar("T")
R = TypeVar("R")

# Failures that degrade a group (or a file) to unmatched
RECOVERABLE_ERRORS = (NoMatchError, TransientLookupError, InvalidQueryError)


def _no_media_files(operation: str) -> NoMatchError:
    return NoMatchError(
        ErrorCode.NO_MEDIA_FILES,
        "No media files to match",
        ErrorContext(operation=operation),
    )


def _missing_collaborator(name: str, operation: str) -> ApplicationError:
    return ApplicationError(
        ErrorCode.UNSUPPORTED_LOOKUP,
        f"No {name} configured",
        ErrorContext(operation=operation),
    )


class MediaMatcher:
    """Match media files to episodes, movies or music tracks.

    Args:
        settings: Matching policy, defaults to built-in settings
        episode_provider: Episode database used by series matching
        movie_service: Movie database used by movie matching
        music_service: Fingerprint service used by music matching
        series_name_matcher: Series name detection and batch classification
        selector: Candidate selector
        episode_matcher: File-to-candidate matcher
        grouper: Batch grouper
        linker: Derived-file linker
        statistics: Statistics collector

    Example:
        >>> matcher = MediaMatcher(episode_provider=my_provider)
        >>> report = matcher.match_series(files, strict=True)
        >>> for match in report.matches:
        ...     print(match.file.name, "->", match.candidate.display_name)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        episode_provider: EpisodeListProvider | None = None,
        movie_service: MovieIdentificationService | None = None,
        music_service: MusicIdentificationService | None = None,
        series_name_matcher: SeriesNameMatcher | None = None,
        selector: CandidateSelector | None = None,
        episode_matcher: EpisodeMatcher | None = None,
        grouper: BatchGrouper | None = None,
        linker: DerivedFileLinker | None = None,
        statistics: MatchingStatistics | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.episode_provider = episode_provider
        self.movie_service = movie_service
        self.music_service = music_service

        self.series_name_matcher = series_name_matcher or SeriesNameMatcher(self.settings.detection)
        self.selector = selector or CandidateSelector(
            self.settings.selection,
            edit_weight=self.settings.episode_matching.edit_weight,
        )
        self.episode_matcher = episode_matcher or EpisodeMatcher(self.settings.episode_matching)
        self.grouper = grouper or BatchGrouper(self.series_name_matcher, self.settings.detection)
        self.linker = linker or DerivedFileLinker()
        self.statistics = statistics or MatchingStatistics()

    def match_series(
        self,
        files: Iterable[MediaFile],
        *,
        strict: bool,
        query: str | None = None,
        episode_filter: EpisodeFilter | None = None,
        sort_order: SortOrder | None = None,
        locale: str | None = None,
    ) -> MatchReport:
        """Match files to episodes.

        Args:
            files: Input files; non-media files are only linked as derived files
            strict: Require unambiguous decisions everywhere
            query: Explicit series query, ``|`` separates alternatives
            episode_filter: Keep only episodes for which this returns True
            sort_order: Episode ordering, defaults to ``settings.app.sort_order``
            locale: Metadata locale, defaults to ``settings.app.locale``

        Returns:
            Report of matches and unmatched files in input order

        Raises:
            NoMatchError: If there are no video or subtitle files
            InvalidQueryError: If ``query`` is blank
            AmbiguousSelectionError: Strict mode with several plausible series
                or several queries for one group
            AmbiguousMatchError: Strict mode with two indistinguishable episodes
        """
        operation = "match_series"
        files = list(files)
        media = [f for f in files if f.kind in (MediaKind.VIDEO, MediaKind.SUBTITLE)]
        if not media:
            raise _no_media_files(operation)
        provider = self.episode_provider
        if provider is None:
            raise _missing_collaborator("episode provider", operation)

        sort_order = sort_order or SortOrder(self.settings.app.sort_order)
        locale = locale or self.settings.app.locale

        self.statistics.start_timing(operation)
        groups = self.grouper.group(media, query)

        if strict:
            for group in groups.values():
                if len(group.queries) > 1:
                    self.statistics.record_ambiguity_abort()
                    raise create_ambiguous_selection_error(
                        f"Multiple series queries for one group in strict mode: {group.queries}",
                        query="|".join(group.queries),
                        candidate_count=len(group.queries),
                        operation=operation,
                    )

        def resolve(group: Group) -> list[Match]:
            return self._resolve_series_group(
                provider,
                group,
                strict=strict,
                episode_filter=episode_filter,
                sort_order=sort_order,
                locale=locale,
            )

        group_matches = self._run_aborting(resolve, list(groups.values()))
        primary = [m for matches in group_matches for m in matches]
        return self._finish(operation, files, primary)

    def _resolve_series_group(
        self,
        provider: EpisodeListProvider,
        group: Group,
        *,
        strict: bool,
        episode_filter: EpisodeFilter | None,
        sort_order: SortOrder,
        locale: str,
    ) -> list[Match]:
        if not group.queries:
            logger.warning("No series name detected for group '%s'", group.title)
            return []

        try:
            identities = self._select_series(provider, group.queries, strict=strict, locale=locale)
        except RECOVERABLE_ERRORS as e:
            self._log_group_failure(e, group)
            return []

        best: list[Match] = []
        best_key = (0, 0.0)
        for identity in identities:
            try:
                episodes = self._fetch_episodes(provider, identity, sort_order, locale)
            except TransientLookupError as e:
                self._log_group_failure(e, group)
                continue

            if episode_filter is not None:
                episodes = [ep for ep in episodes if episode_filter(ep)]
            if not episodes:
                logger.warning("No episodes for '%s' in group '%s'", identity.name, group.title)
                continue

            matches = self._match_episodes(group.files, episodes, strict=strict)
            key = (len(matches), sum(m.score for m in matches))
            if key > best_key:
                best, best_key = matches, key

        return best

    def _select_series(
        self,
        provider: EpisodeListProvider,
        queries: Sequence[str],
        *,
        strict: bool,
        locale: str,
    ) -> list[SearchResult]:
        selected: list[SearchResult] = []
        last_error: MediaMatchError | None = None

        for query in queries:
            try:
                results = provider.search(query, locale)
                self.statistics.record_search()
            except TransientLookupError as e:
                self.statistics.record_search(failed=True)
                last_error = e
                continue

            try:
                chosen = self.selector.select(query, results, strict=strict, operation="select_series")
            except NoMatchError as e:
                self.statistics.record_selection(success=False)
                last_error = e
                continue
            self.statistics.record_selection(success=True)
            selected.extend(chosen)

        selected = list(dict.fromkeys(selected))
        if not selected and last_error is not None:
            raise last_error
        return selected

    def _fetch_episodes(
        self,
        provider: EpisodeListProvider,
        identity: SearchResult,
        sort_order: SortOrder,
        locale: str,
    ) -> list[Episode]:
        episodes = provider.fetch_episode_list(identity, sort_order, locale)
        return list(dict.fromkeys(episodes))

    def _match_episodes(self, files: Sequence[MediaFile], episodes: Sequence[Episode], *, strict: bool) -> list[Match]:
        videos = [f for f in files if f.kind is MediaKind.VIDEO]
        subtitles = [f for f in files if f.kind is MediaKind.SUBTITLE]

        matches: list[Match] = []
        for batch in (videos, subtitles):
            if not batch:
                continue
            outcome = self.episode_matcher.match(batch, episodes, strict=strict)
            if strict and outcome.is_ambiguous:
                raise outcome.to_error(operation="match_series")
            matches.extend(outcome.matches)
        return matches

    def fetch_episode_list(
        self,
        query: str,
        *,
        sort_order: SortOrder | None = None,
        locale: str | None = None,
    ) -> list[Episode]:
        """Fetch the episodes of the best matching series for ``query``.

        Raises:
            InvalidQueryError: If ``query`` is blank
            NoMatchError: If no series can be selected
            TransientLookupError: On provider failure
        """
        operation = "fetch_episode_list"
        if not query or not query.strip():
            raise create_invalid_query_error("Query must not be blank", operation=operation)
        provider = self.episode_provider
        if provider is None:
            raise _missing_collaborator("episode provider", operation)

        locale = locale or self.settings.app.locale
        sort_order = sort_order or SortOrder(self.settings.app.sort_order)

        results = provider.search(query, locale)
        selected = self.selector.select(query, results, strict=False, operation=operation)
        return self._fetch_episodes(provider, selected[0], sort_order, locale)

    def match_movie(
        self,
        files: Iterable[MediaFile],
        *,
        strict: bool,
        query: str | None = None,
        locale: str | None = None,
    ) -> MatchReport:
        """Match files to movies.

        Resolution order per movie file: content hash lookup, an IMDb id
        found in an NFO file of the same folder (named like the movie file,
        or the folder's only video), then a name search with
        ``query`` or the cleaned file name. Files derived from a movie
        file follow it; several files of one movie with the same
        extension are numbered as parts in path order.

        Raises:
            NoMatchError: If there are no movie or NFO files
            InvalidQueryError: If ``query`` is blank
            AmbiguousSelectionError: Strict mode with several plausible movies
        """
        operation = "match_movie"
        files = list(files)
        if query is not None and not query.strip():
            raise create_invalid_query_error("Query must not be blank", operation=operation)

        candidates = [f for f in files if not is_clutter(f.name)]
        movie_files = [f for f in candidates if f.kind is MediaKind.VIDEO]
        nfo_files = [f for f in candidates if f.kind is MediaKind.NFO]
        if not movie_files and not nfo_files:
            raise _no_media_files(operation)
        service = self.movie_service
        if service is None:
            raise _missing_collaborator("movie service", operation)

        locale = locale or self.settings.app.locale
        self.statistics.start_timing(operation)

        aux_files = [f for f in candidates if f.kind in (MediaKind.SUBTITLE, MediaKind.NFO)]
        derivatives = {movie: self.linker.find_derivatives(movie, aux_files) for movie in movie_files}
        derived = {d for ds in derivatives.values() for d in ds}
        orphans = [f for f in aux_files if f not in derived and f.kind is MediaKind.SUBTITLE]

        movie_by_file: dict[MediaFile, Movie] = {}
        if query is None:
            movie_by_file.update(self._lookup_by_hash(service, movie_files, locale))
            movie_by_file.update(self._lookup_by_nfo(service, nfo_files, movie_files, movie_by_file, locale))

        pending = [f for f in movie_files + orphans if f not in movie_by_file]
        by_query: dict[str, list[MediaFile]] = {}
        for file in pending:
            movie_query = query.strip() if query else movie_query_for(file)
            by_query.setdefault(movie_query, []).append(file)

        def resolve(item: tuple[str, list[MediaFile]]) -> Movie | None:
            return self._detect_movie(service, item[0], strict=strict, locale=locale)

        items = list(by_query.items())
        for (movie_query, query_files), movie in zip(items, self._run_aborting(resolve, items)):
            if movie is None:
                logger.warning("No movie found for '%s'", movie_query)
                continue
            for file in query_files:
                movie_by_file[file] = movie

        primary = self._movie_matches(movie_files + orphans + nfo_files, movie_by_file)
        for movie_file in movie_files:
            candidate = next((m.candidate for m in primary if m.file == movie_file), None)
            if candidate is None:
                continue
            for d in derivatives[movie_file]:
                if not any(m.file == d for m in primary):
                    primary.append(Match(d, candidate.clone(), 1.0))

        return self._finish(operation, files, primary, link=False)

    def _lookup_by_hash(
        self,
        service: MovieIdentificationService,
        movie_files: Sequence[MediaFile],
        locale: str,
    ) -> dict[MediaFile, Movie]:
        if not movie_files:
            return {}
        try:
            found = service.lookup_by_hash(movie_files, locale)
        except TransientLookupError as e:
            log_operation_error(logger, e, operation="lookup_by_hash", level=logging.WARNING)
            return {}
        logger.debug("Hash lookup identified %d of %d files", len(found), len(movie_files))
        return dict(found)

    def _lookup_by_nfo(
        self,
        service: MovieIdentificationService,
        nfo_files: Sequence[MediaFile],
        movie_files: Sequence[MediaFile],
        resolved: dict[MediaFile, Movie],
        locale: str,
    ) -> dict[MediaFile, Movie]:
        found: dict[MediaFile, Movie] = {}
        for nfo in nfo_files:
            imdb_id = grep_imdb_id(nfo.path)
            if imdb_id is None:
                continue
            try:
                movie = service.get_movie_by_imdb_id(imdb_id, locale)
            except TransientLookupError as e:
                log_operation_error(logger, e, operation="lookup_by_nfo", level=logging.WARNING)
                continue
            if movie is None:
                continue

            found[nfo] = movie
            nfo_base = nfo.base_name.lower()
            siblings = [f for f in movie_files if f.parent == nfo.parent]
            for movie_file in siblings:
                if movie_file in resolved:
                    continue
                named_after = bool(nfo_base) and movie_file.base_name.lower().startswith(nfo_base)
                if named_after or len(siblings) == 1:
                    found.setdefault(movie_file, movie)
        return found

    def _detect_movie(
        self,
        service: MovieIdentificationService,
        movie_query: str,
        *,
        strict: bool,
        locale: str,
    ) -> Movie | None:
        try:
            results = service.search_movie(movie_query, locale)
            self.statistics.record_search()
        except TransientLookupError as e:
            self.statistics.record_search(failed=True)
            log_operation_error(logger, e, operation="match_movie", level=logging.WARNING)
            return None

        try:
            selected = self.selector.select(movie_query, results, strict=strict, operation="select_movie")
        except NoMatchError as e:
            self.statistics.record_selection(success=False)
            log_operation_error(logger, e, operation="match_movie", level=logging.WARNING)
            return None
        self.statistics.record_selection(success=True)

        try:
            return service.get_movie(selected[0], locale)
        except TransientLookupError as e:
            log_operation_error(logger, e, operation="match_movie", level=logging.WARNING)
            return None

    def _movie_matches(self, files: Sequence[MediaFile], movie_by_file: dict[MediaFile, Movie]) -> list[Match]:
        """Clone each file's movie, numbering parts per movie and extension."""
        by_movie: dict[Movie, list[MediaFile]] = {}
        for file in files:
            movie = movie_by_file.get(file)
            if movie is not None:
                by_movie.setdefault(movie, []).append(file)

        matches = []
        for movie, movie_files in by_movie.items():
            by_extension: dict[str, list[MediaFile]] = {}
            for file in movie_files:
                by_extension.setdefault(file.extension, []).append(file)

            for same_extension in by_extension.values():
                ordered = sorted(same_extension, key=lambda f: str(f.path))
                count = len(ordered)
                for index, file in enumerate(ordered):
                    candidate = movie.with_part(index + 1, count) if count > 1 else movie.clone()
                    matches.append(Match(file, candidate, 1.0))
        return matches

    def match_music(self, files: Iterable[MediaFile]) -> MatchReport:
        """Identify audio files with the music service.

        Raises:
            NoMatchError: If there are no audio files
        """
        operation = "match_music"
        files = list(files)
        audio = [f for f in files if f.kind is MediaKind.AUDIO]
        if not audio:
            raise _no_media_files(operation)
        if self.music_service is None:
            raise _missing_collaborator("music service", operation)

        self.statistics.start_timing(operation)
        try:
            tracks = self.music_service.lookup(audio)
            self.statistics.record_search()
        except TransientLookupError as e:
            self.statistics.record_search(failed=True)
            log_operation_error(logger, e, operation=operation, level=logging.WARNING)
            tracks = {}

        primary = [
            Match(file, track.clone(), 1.0)
            for file in audio
            if (track := tracks.get(file)) is not None
        ]
        return self._finish(operation, files, primary, link=False)

    def match_auto(
        self,
        files: Iterable[MediaFile],
        *,
        strict: bool,
        query: str | None = None,
        locale: str | None = None,
    ) -> MatchReport:
        """Classify the batch and dispatch to the matching entry point."""
        files = list(files)
        mode = self.series_name_matcher.classify(files)
        logger.info("Auto-detected %s mode for %d files", mode.value, len(files))

        if mode is MediaMode.MUSIC:
            return self.match_music(files)
        if mode is MediaMode.EPISODE:
            return self.match_series(files, strict=strict, query=query, locale=locale)
        return self.match_movie(files, strict=strict, query=query, locale=locale)

    def _run_aborting(self, fn: Callable[[T], R], items: Sequence[T]) -> list[R]:
        """Map ``fn`` over items in order, recording strict-mode aborts."""
        try:
            return self._map_groups(fn, items)
        except (AmbiguousSelectionError, AmbiguousMatchError):
            self.statistics.record_ambiguity_abort()
            raise

    def _map_groups(self, fn: Callable[[T], R], items: Sequence[T]) -> list[R]:
        """Apply ``fn`` to every item, results in item order."""
        workers = self.settings.performance.max_workers
        if workers <= 1 or len(items) <= 1:
            return [fn(item) for item in items]

        with ThreadPoolExecutor(max_workers=min(workers, len(items))) as executor:
            return list(executor.map(fn, items))

    def _finish(
        self,
        operation: str,
        files: Sequence[MediaFile],
        primary: list[Match],
        *,
        link: bool = True,
    ) -> MatchReport:
        """Link derived files, order the report by input and log it."""
        by_file = {m.file: m for m in primary}

        if link:
            video_matches = [m for m in primary if m.file.kind is MediaKind.VIDEO]
            aux = [
                f
                for f in files
                if f not in by_file and f.kind in (MediaKind.SUBTITLE, MediaKind.NFO, MediaKind.OTHER)
            ]
            for match in self.linker.link(aux, video_matches):
                by_file[match.file] = match

        report = MatchReport(
            matches=[by_file[f] for f in files if f in by_file],
            unmatched=[f for f in files if f not in by_file],
        )

        for file in report.unmatched:
            logger.warning("Failed to match file: %s", file.name)

        self.statistics.record_matches(len(report.matches), len(report.unmatched))
        duration = self.statistics.end_timing(operation)
        self.statistics.log_summary(operation)
        log_operation_success(
            logger,
            operation,
            duration * 1000,
            result_info={"matched": len(report.matches), "unmatched": len(report.unmatched)},
        )
        return report

    def _log_group_failure(self, error: MediaMatchError, group: Group) -> None:
        log_operation_error(
            logger,
            error,
            additional_context={"group": group.title, "file_count": len(group.files)},
            level=logging.WARNING,
        )


def movie_query_for(file: MediaFile) -> str:
    """Search query for a movie file: the cleaned name without its year.

    Example:
        >>> movie_query_for(MediaFile.of("/m/The.Matrix.1999.1080p.BluRay.mkv"))
        'The Matrix'
    """
    tokens = release_tokens(file.stem)
    year = extract_year(file.stem)
    if year is not None:
        positions = [i for i, token in enumerate(tokens) if token == str(year)]
        if positions and positions[-1] > 0:
            tokens = tokens[: positions[-1]]
    return " ".join(tokens) or file.stem


def grep_imdb_id(path: Path) -> str | None:
    """First IMDb id mentioned in a text file, if it can be read."""
    text = safe_read_text(path)
    if text is None:
        return None
    match = IMDB_ID_PATTERN.search(text)
    return match.group(1) if match else None
