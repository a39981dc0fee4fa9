"""
mediamatch Constants Module

Centralized constants: recognized file formats and the filename
regex families used for release-name parsing.
"""

from .file_formats import (
    ArchiveFormats,
    AudioFormats,
    MetadataFormats,
    SubtitleFormats,
    VideoFormats,
)
from .filename_patterns import NumberingPatterns

__all__ = [
    "ArchiveFormats",
    "AudioFormats",
    "MetadataFormats",
    "NumberingPatterns",
    "SubtitleFormats",
    "VideoFormats",
]
