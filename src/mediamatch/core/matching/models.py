"""Matching Domain Models.

Immutable value objects used by the candidate selector and the file
matcher. The file matcher returns a ``MatchingOutcome`` instead of
raising, so the caller decides whether ambiguity aborts the pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from mediamatch.core.models import Candidate, Match, MediaFile, SearchResult, SubtitleDescriptor
from mediamatch.shared.errors import AmbiguousMatchError, create_ambiguous_match_error


@dataclass(frozen=True)
class ScoredSearchResult:
    """A search result with its similarity to the query.

    Attributes:
        result: The provider search result
        similarity: Best similarity over the result's effective names
        prefix_match: Whether an effective name starts with the query
    """

    result: SearchResult
    similarity: float
    prefix_match: bool = False


@dataclass(frozen=True)
class MatchFeatures:
    """Comparable features of one side of a file/candidate pair.

    Any component may be missing; only components present on both sides
    contribute to the composite score.
    """

    title: str | None = None
    numbering: tuple[int, int] | None = None
    airdate: date | None = None
    absolute: int | None = None


@dataclass(frozen=True)
class ScoredPair:
    """Composite score of one file/candidate pair."""

    file_index: int
    candidate_index: int
    score: float


@dataclass(frozen=True)
class Ambiguity:
    """Two candidates indistinguishable for one file.

    Attributes:
        file: The file both candidates scored for
        first: The candidate that would have been assigned
        second: The runner-up within the tie margin
        score: Score of the assigned pair
    """

    file: MediaFile
    first: Candidate | SubtitleDescriptor
    second: Candidate | SubtitleDescriptor
    score: float

    def describe(self) -> str:
        return (
            f"{self.file.name}: '{self.first.display_name}' and "
            f"'{self.second.display_name}' are indistinguishable ({self.score:.2f})"
        )


@dataclass(frozen=True)
class MatchingOutcome:
    """Result of one file matching pass.

    Attributes:
        matches: Accepted one-to-one assignments, in input file order
        unmatched: Files with no acceptable candidate, in input order
        ambiguity: Set in strict mode when a tie was detected; the
                   assignments are then not trustworthy
    """

    matches: list[Match] = field(default_factory=list)
    unmatched: list[MediaFile] = field(default_factory=list)
    ambiguity: Ambiguity | None = None

    @property
    def is_ambiguous(self) -> bool:
        return self.ambiguity is not None

    def raise_for_ambiguity(self, operation: str | None = None) -> None:
        """Raise AmbiguousMatchError if the pass was ambiguous."""
        if self.ambiguity is not None:
            raise self.to_error(operation)

    def to_error(self, operation: str | None = None) -> AmbiguousMatchError:
        assert self.ambiguity is not None
        return create_ambiguous_match_error(
            self.ambiguity.describe(),
            file_path=str(self.ambiguity.file.path),
            operation=operation,
        )
