"""File naming utilities.

Release name cleanup and the structural derivation predicate that ties
auxiliary files (subtitles, NFO) to their primary media file.
"""

from __future__ import annotations

from pathlib import PurePath

from mediamatch.shared.constants.file_formats import (
    ArchiveFormats,
    AudioFormats,
    MetadataFormats,
    SubtitleFormats,
    VideoFormats,
)
from mediamatch.shared.constants.filename_patterns import (
    BRACKET_TAG_PATTERN,
    CLUTTER_PATTERN,
    LANGUAGE_SUFFIX_PATTERN,
    PUNCTUATION_PATTERN,
    RELEASE_TOKEN_PATTERN,
    SEPARATOR_PATTERN,
    TECHNICAL_REWRITES,
    YEAR_PATTERN,
)

KNOWN_EXTENSIONS = frozenset(
    VideoFormats.EXTENSIONS
    + SubtitleFormats.EXTENSIONS
    + AudioFormats.EXTENSIONS
    + ArchiveFormats.EXTENSIONS
    + MetadataFormats.NFO_EXTENSIONS
    + (".jpg", ".jpeg", ".png", ".txt"),
)


def strip_extension(name: str) -> str:
    """Remove the extension if it is a recognized media or sidecar one."""
    suffix = PurePath(name).suffix
    if suffix and suffix.lower() in KNOWN_EXTENSIONS:
        return name[: -len(suffix)]
    return name


def split_tokens(name: str) -> list[str]:
    """Split a name into tokens, keeping original case.

    Bracketed tags are removed, ``.``, ``_``, ``-`` and whitespace are
    equivalent boundaries, and punctuation inside tokens is dropped.
    """
    text = BRACKET_TAG_PATTERN.sub(" ", name)
    for pattern, replacement in TECHNICAL_REWRITES:
        text = pattern.sub(replacement, text)

    tokens = []
    for raw in SEPARATOR_PATTERN.split(text):
        token = PUNCTUATION_PATTERN.sub("", raw)
        if token:
            tokens.append(token)
    return tokens


def release_tokens(name: str) -> list[str]:
    """Tokens of ``name`` with release information removed.

    Everything from the first technical token on (resolution, source,
    codec, audio, release flags) is cut, as are trailing language and
    subtitle flags. The first token is always kept.
    """
    tokens = split_tokens(strip_extension(name))

    for index, token in enumerate(tokens):
        if index > 0 and RELEASE_TOKEN_PATTERN.match(token):
            tokens = tokens[:index]
            break

    while len(tokens) > 1 and LANGUAGE_SUFFIX_PATTERN.match(tokens[-1]):
        tokens.pop()

    return tokens


def strip_release_info(name: str) -> str:
    """Return the human part of a release name.

    Example:
        >>> strip_release_info("Show.Name.S01E02.720p.HDTV.x264-GRP.mkv")
        'Show Name S01E02'
        >>> strip_release_info("[Grp] Movie (2020) [1080p].eng.srt")
        'Movie 2020'
    """
    return " ".join(release_tokens(name))


def is_derived_filename(a: str, b: str) -> bool:
    """Check whether one file name is structurally derived from the other.

    True iff after stripping release info and language suffixes the
    lower-cased token sequence of one name is a non-empty prefix of the
    other's.
    """
    tokens_a = [t.lower() for t in release_tokens(a)]
    tokens_b = [t.lower() for t in release_tokens(b)]
    if not tokens_a or not tokens_b:
        return False

    shorter, longer = sorted((tokens_a, tokens_b), key=len)
    return longer[: len(shorter)] == shorter


def is_clutter(name: str) -> bool:
    """Samples, trailers and extras that movie matching ignores."""
    return CLUTTER_PATTERN.search(strip_extension(name)) is not None


def extract_year(name: str) -> int | None:
    """Return the last plausible release year in the cleaned name."""
    years = YEAR_PATTERN.findall(strip_release_info(name))
    return int(years[-1]) if years else None
