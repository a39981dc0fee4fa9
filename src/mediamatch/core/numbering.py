"""Season/episode numbering recognition.

Patterns are tried in priority order (``S01E02``, ``1x02``,
``Season 1 Episode 2``, then, outside strict mode, ``102``); the first
pattern that matches anywhere in the name wins.
"""

from __future__ import annotations

from datetime import date
from typing import NamedTuple

from mediamatch.shared.constants.filename_patterns import (
    AIRDATE_PATTERN,
    NumberingPatterns,
)


class SeasonEpisode(NamedTuple):
    """Season and episode numbers extracted from a filename."""

    season: int
    episode: int

    def __str__(self) -> str:
        return f"S{self.season:02d}E{self.episode:02d}"


class NumberingMatch(NamedTuple):
    """A recognized numbering and its span in the name."""

    numbering: SeasonEpisode
    start: int
    end: int


def find_numbering(name: str, *, strict: bool = False) -> NumberingMatch | None:
    """Locate the highest priority numbering pattern in ``name``.

    Args:
        name: File name or stem
        strict: Only use the unambiguous patterns

    Returns:
        Numbering and its start offset, or None
    """
    patterns = NumberingPatterns.STRICT if strict else NumberingPatterns.ALL
    for pattern in patterns:
        for match in pattern.finditer(name):
            season = int(match.group("season"))
            episode = int(match.group("episode"))
            if pattern is NumberingPatterns.THREE_DIGIT and episode == 0:
                continue
            return NumberingMatch(SeasonEpisode(season, episode), match.start(), match.end())
    return None


def extract_numbering_pattern(name: str, *, strict: bool = False) -> SeasonEpisode | None:
    """Extract ``(season, episode)`` from a filename.

    Example:
        >>> extract_numbering_pattern("Show.Name.S01E02.720p.mkv")
        SeasonEpisode(season=1, episode=2)
        >>> extract_numbering_pattern("Show.Name.102.mkv", strict=True) is None
        True
    """
    found = find_numbering(name, strict=strict)
    return found.numbering if found else None


def extract_airdate(name: str) -> date | None:
    """Extract a ``YYYY.MM.DD`` air date, ignoring impossible dates."""
    for match in AIRDATE_PATTERN.finditer(name):
        try:
            return date(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
            )
        except ValueError:
            continue
    return None
