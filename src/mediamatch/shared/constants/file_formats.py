"""
File Format Constants

This module contains all constants related to file formats
and extensions recognized by the matcher.
"""

from __future__ import annotations


class VideoFormats:
    """Video format configuration constants."""

    EXTENSIONS = (
        ".mkv",
        ".mp4",
        ".avi",
        ".mov",
        ".wmv",
        ".flv",
        ".webm",
        ".m4v",
        ".m2ts",
        ".ts",
        ".mpg",
        ".mpeg",
        ".ogm",
        ".divx",
    )


class SubtitleFormats:
    """Subtitle format configuration constants."""

    EXTENSIONS = (
        ".srt",
        ".ass",
        ".ssa",
        ".sub",
        ".idx",
        ".vtt",
        ".smi",
        ".sami",
        ".sup",
    )


class AudioFormats:
    """Audio format configuration constants."""

    EXTENSIONS = (
        ".mp3",
        ".flac",
        ".m4a",
        ".aac",
        ".ogg",
        ".opus",
        ".wav",
        ".wma",
        ".ape",
    )


class ArchiveFormats:
    """Archive format configuration constants."""

    EXTENSIONS = (".rar", ".zip", ".7z", ".tar", ".gz")


class MetadataFormats:
    """Metadata sidecar configuration constants."""

    NFO_EXTENSIONS = (".nfo",)
