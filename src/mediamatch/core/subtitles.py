"""Subtitle lookup for video files.

Subtitle providers are passed in as an immutable tuple at construction
time and are tried in order. Each provider's search hits are matched to
the videos still lacking a subtitle with the regular file matcher.
Downloading the chosen subtitles is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mediamatch.core.derived_linker import DerivedFileLinker
from mediamatch.core.matching.episode_matcher import EpisodeMatcher
from mediamatch.core.models import Match, MatchReport, MediaFile, MediaKind
from mediamatch.core.naming import strip_release_info
from mediamatch.shared.errors import TransientLookupError
from mediamatch.shared.logging import log_operation_error
from mediamatch.shared.protocols.services import SubtitleProvider

logger = logging.getLogger(__name__)


class SubtitleLookup:
    """Find subtitles for videos across several providers.

    Args:
        providers: Providers in priority order
        matcher: File matcher used to pair descriptors with videos
        linker: Derivation rules used to spot existing subtitles
    """

    def __init__(
        self,
        providers: Sequence[SubtitleProvider],
        matcher: EpisodeMatcher | None = None,
        linker: DerivedFileLinker | None = None,
    ) -> None:
        self.providers: tuple[SubtitleProvider, ...] = tuple(providers)
        self.matcher = matcher or EpisodeMatcher()
        self.linker = linker or DerivedFileLinker()

    def find_missing_subtitles(
        self,
        videos: Sequence[MediaFile],
        siblings: Sequence[MediaFile],
        language_code: str,
    ) -> list[MediaFile]:
        """Videos with no derived subtitle tagged ``.{language_code}``.

        Example:
            Given ``Movie.mkv`` and ``Movie.eng.srt`` in one folder,
            ``find_missing_subtitles([movie], siblings, "eng")`` is empty
            while the same call with ``"ger"`` returns ``[movie]``.
        """
        tag = f".{language_code.lower()}"
        subtitles = [f for f in siblings if f.kind is MediaKind.SUBTITLE]

        missing = []
        for video in videos:
            has_subtitle = any(
                tag in sub.name.lower() for sub in self.linker.find_derivatives(video, subtitles)
            )
            if not has_subtitle:
                missing.append(video)
        return missing

    def lookup(
        self,
        videos: Sequence[MediaFile],
        queries: Sequence[str] | None,
        language: str,
        *,
        strict: bool,
    ) -> MatchReport:
        """Match subtitle search hits to videos.

        Args:
            videos: Videos to find subtitles for
            queries: Search queries; derived from the video names if empty
            language: Subtitle language code
            strict: Abort on ambiguous pairings

        Returns:
            Report with one subtitle descriptor per matched video

        Raises:
            AmbiguousMatchError: In strict mode when two subtitles tie
        """
        search_queries = list(queries or [])
        if not search_queries:
            search_queries = list(dict.fromkeys(strip_release_info(v.stem) for v in videos))

        found: dict[MediaFile, Match] = {}
        remaining = list(videos)

        for provider in self.providers:
            if not remaining:
                break
            try:
                descriptors = provider.search(search_queries, language)
            except TransientLookupError as e:
                log_operation_error(
                    logger,
                    e,
                    operation="subtitle_lookup",
                    additional_context={"provider": provider.name},
                    level=logging.WARNING,
                )
                continue

            logger.debug("%s returned %d subtitles", provider.name, len(descriptors))
            outcome = self.matcher.match(remaining, descriptors, strict=strict)
            outcome.raise_for_ambiguity(operation="subtitle_lookup")

            for match in outcome.matches:
                found[match.file] = match
            remaining = outcome.unmatched

        for video in remaining:
            logger.warning("No subtitles found for %s", video.name)

        return MatchReport(
            matches=[found[v] for v in videos if v in found],
            unmatched=[v for v in videos if v not in found],
        )
