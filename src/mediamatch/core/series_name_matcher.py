"""Series name detection from batches of file names.

Two sources of series names are combined:

- numbering prefixes: the text in front of a recognized ``S01E02`` style
  pattern in a single file name;
- common word sequences (CWS): the longest shared leading token run
  between two names of the same batch, used as a series anchor even when
  no numbering pattern is present.

The same signals drive the series-vs-movie decision for a batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from mediamatch.config.models.matching_settings import DetectionSettings
from mediamatch.core.models import MediaFile, MediaKind, MediaMode
from mediamatch.core.naming import release_tokens
from mediamatch.core.numbering import extract_numbering_pattern, find_numbering
from mediamatch.shared.constants.filename_patterns import AIRDATE_PATTERN

logger = logging.getLogger(__name__)


def name_tokens(name: str) -> list[str]:
    """Release-stripped tokens in front of any numbering or air date.

    Example:
        >>> name_tokens("Show.Name.S01E02.Pilot.720p.mkv")
        ['Show', 'Name']
    """
    cleaned = " ".join(release_tokens(name))
    cut = len(cleaned)

    found = find_numbering(cleaned)
    if found is not None:
        cut = found.start
    airdate = AIRDATE_PATTERN.search(cleaned)
    if airdate is not None:
        cut = min(cut, airdate.start())

    return cleaned[:cut].split()


def _common_prefix_length(a: Sequence[str], b: Sequence[str]) -> int:
    length = 0
    for left, right in zip(a, b):
        if left.lower() != right.lower():
            break
        length += 1
    return length


def _is_token_prefix(prefix: Sequence[str], tokens: Sequence[str]) -> bool:
    return 0 < len(prefix) <= len(tokens) and _common_prefix_length(prefix, tokens) == len(prefix)


class SeriesNameMatcher:
    """Detect series names and classify batches.

    Attributes:
        component_name: Name used in logs and grouping evidence
        settings: Detection thresholds
    """

    component_name = "series_name"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    def match_by_first_common_word_sequence(self, a: str, b: str) -> str | None:
        """Shared leading token run of two names.

        Returns:
            The run in ``a``'s original case when it is longer than
            ``min_common_words`` tokens, else None

        Example:
            >>> SeriesNameMatcher().match_by_first_common_word_sequence(
            ...     "The.Office.S01E01.mkv", "the office s02e03.avi")
            'The Office'
        """
        tokens_a = name_tokens(a)
        length = _common_prefix_length(tokens_a, name_tokens(b))
        if length > self.settings.min_common_words:
            return " ".join(tokens_a[:length])
        return None

    def match_all(self, names: Sequence[str]) -> list[str]:
        """Common word sequence anchors of a batch.

        Each name contributes the longest run it shares with any other
        name. Anchors keep original case and first-seen order and are
        deduplicated case-insensitively. Batches smaller than
        ``min_batch_size`` yield no anchors.
        """
        if len(names) < self.settings.min_batch_size:
            return []

        tokenized = [name_tokens(name) for name in names]
        anchors: list[str] = []
        seen: set[str] = set()

        for i, tokens in enumerate(tokenized):
            best = 0
            for j, other in enumerate(tokenized):
                if i != j:
                    best = max(best, _common_prefix_length(tokens, other))
            if best <= self.settings.min_common_words:
                continue
            anchor = " ".join(tokens[:best])
            if anchor.lower() not in seen:
                seen.add(anchor.lower())
                anchors.append(anchor)

        logger.debug("Detected %d common word sequences in %d names", len(anchors), len(names))
        return anchors

    def anchor_for(self, name: str, anchors: Iterable[str]) -> str | None:
        """Longest anchor whose tokens are a prefix of ``name``'s tokens."""
        tokens = name_tokens(name)
        best: str | None = None
        best_length = 0
        for anchor in anchors:
            anchor_tokens = anchor.split()
            if len(anchor_tokens) > best_length and _is_token_prefix(anchor_tokens, tokens):
                best, best_length = anchor, len(anchor_tokens)
        return best

    def series_name_prefix(self, name: str) -> str | None:
        """Text in front of the first numbering pattern of a single name.

        Example:
            >>> SeriesNameMatcher().series_name_prefix("Show.Name.1x02.avi")
            'Show Name'
        """
        cleaned = " ".join(release_tokens(name))
        found = find_numbering(cleaned)
        if found is None:
            return None
        prefix = cleaned[: found.start].strip()
        return prefix or None

    def detect_series_names(self, names: Sequence[str]) -> list[str]:
        """Series names of a batch: CWS anchors, then per-file prefixes."""
        anchors = self.match_all(names)
        detected = list(anchors)
        seen = {anchor.lower() for anchor in anchors}

        for name in names:
            if self.anchor_for(name, anchors) is not None:
                continue
            prefix = self.series_name_prefix(name)
            if prefix and prefix.lower() not in seen:
                seen.add(prefix.lower())
                detected.append(prefix)
        return detected

    def classify(self, files: Sequence[MediaFile]) -> MediaMode:
        """Decide whether a batch is episodic, movie-like or music.

        All-audio batches are music. Otherwise a batch is episodic when
        the fraction of video and subtitle files carrying a strict
        numbering pattern, or the fraction falling under a common word
        sequence anchor, exceeds ``episode_ratio_threshold``.
        """
        if files and all(f.kind is MediaKind.AUDIO for f in files):
            return MediaMode.MUSIC

        eligible = [f for f in files if f.kind in (MediaKind.VIDEO, MediaKind.SUBTITLE)] or list(files)
        if not eligible:
            return MediaMode.MOVIE

        names = [f.name for f in eligible]
        sxe = sum(1 for name in names if extract_numbering_pattern(name, strict=True))

        anchors = self.match_all(names)
        cws = sum(1 for name in names if self.anchor_for(name, anchors) is not None)

        limit = self.settings.episode_ratio_threshold * len(names)
        mode = MediaMode.EPISODE if sxe > limit or cws > limit else MediaMode.MOVIE
        logger.debug(
            "Classified %d files as %s (numbering=%d, cws=%d)",
            len(names),
            mode.value,
            sxe,
            cws,
        )
        return mode
