"""Filename pattern constants for media file name processing.

This module contains all regex patterns and constants used for parsing
release names, following the One Source of Truth principle.
"""

from __future__ import annotations

import re
from typing import Final

# Token boundaries: dots, underscores, dashes and whitespace are equivalent
SEPARATOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\s._\-]+")

# Punctuation that never belongs to a name token
PUNCTUATION_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\w\s]")

# Bracketed release tags such as [Group] or [1080p] or {tag}
BRACKET_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"\[[^\]]*\]|\{[^}]*\}")

# Multi-character technical tokens that contain separators, folded before splitting
TECHNICAL_REWRITES: Final[list[tuple[re.Pattern[str], str]]] = [
    (re.compile(r"\bweb[\s._\-]?dl\b", re.IGNORECASE), " webdl "),
    (re.compile(r"\bblu[\s._\-]?ray\b", re.IGNORECASE), " bluray "),
    (re.compile(r"\bh\.?(26[45])\b", re.IGNORECASE), r" h\1 "),
    (re.compile(r"\bdts[\s._\-]?hd\b", re.IGNORECASE), " dtshd "),
    (re.compile(r"\b(?:dd|ddp)?[257]\.[01]\b", re.IGNORECASE), " audiochannels "),
]

# Release information tokens (matched against a whole lower-cased token)
RELEASE_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:"
    r"\d{3,4}[pi]|4k|uhd|hdr|hdr10|sdr|"
    r"bluray|bdrip|brrip|bdremux|remux|webdl|webrip|web|hdtv|pdtv|dsr|"
    r"dvdrip|dvdscr|dvd|dvd5|dvd9|hdrip|hdcam|ts|cam|"
    r"x264|x265|h264|h265|hevc|avc|xvid|divx|10bit|8bit|"
    r"aac|aac2|ac3|eac3|dts|dtshd|truehd|atmos|flac|mp3|audiochannels|"
    r"proper|repack|rerip|internal|limited|extended|unrated|uncut|"
    r"dubbed|subbed|multi|multisubs|dual|remastered|"
    r"nf|amzn|dsnp|hmax|atvp"
    r")$",
    re.IGNORECASE,
)

# Language and subtitle flag suffixes (only stripped at the end of a name)
LANGUAGE_SUFFIX_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:"
    r"en|eng|english|de|ger|deu|german|fr|fre|fra|french|es|spa|spanish|"
    r"ita|italian|nl|dut|nld|pt|por|ru|rus|ja|jpn|ko|kor|zh|chi|zho|"
    r"sv|swe|nor|da|dan|fi|fin|pl|pol|cs|cze|ces|hu|hun|tr|tur|ar|ara|"
    r"forced|sdh|cc"
    r")$",
    re.IGNORECASE,
)

# Clutter files ignored by movie matching (samples, trailers, extras)
CLUTTER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:^|[\s._\-\[\(])(?:sample|trailer|extras?|featurettes?|behind[\s._\-]the[\s._\-]scenes)"
    r"(?:$|[\s._\-\]\)])",
    re.IGNORECASE,
)

# IMDb identifier inside NFO text
IMDB_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"\b(tt\d{7,8})\b")

# Release year
YEAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")


class NumberingPatterns:
    """Season/episode numbering patterns in priority order.

    Each pattern exposes named groups ``season`` and ``episode``.
    Strict patterns are unambiguous; the three digit pattern is only
    used in non-strict mode because it collides with plain numbers.
    """

    SXXEYY: Final[re.Pattern[str]] = re.compile(
        r"(?<![a-z0-9])s(?P<season>\d{1,2})[\s._\-]?e(?P<episode>\d{1,3})(?!\d)",
        re.IGNORECASE,
    )
    NXNN: Final[re.Pattern[str]] = re.compile(
        r"(?<![a-z0-9])(?P<season>\d{1,2})x(?P<episode>\d{2,3})(?!\d)",
        re.IGNORECASE,
    )
    SEASON_EPISODE_WORDS: Final[re.Pattern[str]] = re.compile(
        r"season[\s._\-]*(?P<season>\d{1,2})[\s._\-]*episode[\s._\-]*(?P<episode>\d{1,3})(?!\d)",
        re.IGNORECASE,
    )
    THREE_DIGIT: Final[re.Pattern[str]] = re.compile(
        r"(?<![a-z0-9])(?<!h\.)(?P<season>[1-9])(?P<episode>\d{2})(?![0-9])(?![pi]\b)",
        re.IGNORECASE,
    )

    STRICT: Final[tuple[re.Pattern[str], ...]] = (SXXEYY, NXNN, SEASON_EPISODE_WORDS)
    ALL: Final[tuple[re.Pattern[str], ...]] = (SXXEYY, NXNN, SEASON_EPISODE_WORDS, THREE_DIGIT)


# Air dates such as 2012.05.21 or 2012-05-21
AIRDATE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?<!\d)(?P<year>(?:19|20)\d{2})[\s._\-](?P<month>\d{2})[\s._\-](?P<day>\d{2})(?!\d)",
)
