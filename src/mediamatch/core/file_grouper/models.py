"""Data models for batch grouping.

This module defines the groups a file batch is partitioned into and the
evidence recorded for each grouping decision.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mediamatch.core.models import MediaFile


@dataclass(frozen=True)
class GroupingEvidence:
    """Why files were grouped together.

    Attributes:
        selected_matcher: Source of the group identity.
                         One of "query", "series_name" or "folder"
        explanation: User-facing explanation of the decision
        confident: Whether the identity may span several folders

    Example:
        >>> evidence = GroupingEvidence(
        ...     selected_matcher="series_name",
        ...     explanation="Common word sequence 'The Office'",
        ...     confident=True,
        ... )
        >>> evidence.to_dict()["selected_matcher"]
        'series_name'
    """

    selected_matcher: str
    explanation: str
    confident: bool = True

    def to_dict(self) -> dict[str, object]:
        """Convert evidence to dictionary for logging/serialization."""
        return {
            "selected_matcher": self.selected_matcher,
            "explanation": self.explanation,
            "confident": self.confident,
        }


@dataclass
class Group:
    """Files sharing one identity-resolution query.

    Attributes:
        title: Display name of the group (series name or folder name)
        files: Files in input order
        queries: Query strings used to search for the group's identity;
                 empty when nothing could be inferred
        evidence: Why the files were grouped
    """

    title: str
    files: list[MediaFile] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)
    evidence: GroupingEvidence | None = None

    def add_file(self, file: MediaFile) -> None:
        self.files.append(file)

    def to_dict(self) -> dict[str, object]:
        """Convert group to dictionary for logging/serialization."""
        return {
            "title": self.title,
            "file_count": len(self.files),
            "files": [str(f.path) for f in self.files],
            "queries": list(self.queries),
            "evidence": self.evidence.to_dict() if self.evidence else None,
        }


__all__ = ["Group", "GroupingEvidence"]
