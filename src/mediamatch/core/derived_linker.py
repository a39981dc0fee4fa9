"""Derived-file linking.

Auxiliary files (subtitles, NFO, artwork) inherit the candidate of the
primary media file they were derived from. A file is derived from a
primary when both live in the same folder and their release-stripped
names are prefixes of one another.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from mediamatch.core.models import Match, MediaFile
from mediamatch.core.naming import is_derived_filename

logger = logging.getLogger(__name__)

DerivationPredicate = Callable[[str, str], bool]


class DerivedFileLinker:
    """Attach auxiliary files to primary matches.

    Args:
        is_derived: Name derivation predicate, defaults to
                    :func:`mediamatch.core.naming.is_derived_filename`
    """

    component_name = "derived_linker"

    def __init__(self, is_derived: DerivationPredicate = is_derived_filename) -> None:
        self.is_derived = is_derived

    def is_derived_file(self, aux: MediaFile, primary: MediaFile) -> bool:
        """Same folder and structurally derived name."""
        return (
            aux != primary
            and aux.parent == primary.parent
            and self.is_derived(aux.name, primary.name)
        )

    def find_derivatives(
        self,
        primary: MediaFile,
        candidates: Sequence[MediaFile],
    ) -> list[MediaFile]:
        """Files among ``candidates`` derived from ``primary``."""
        return [f for f in candidates if self.is_derived_file(f, primary)]

    def link(self, aux_files: Sequence[MediaFile], primary_matches: Sequence[Match]) -> list[Match]:
        """Create matches for auxiliary files.

        Each auxiliary file is linked to the first resolved primary match
        it derives from and receives a clone of that candidate, so later
        per-file changes never reach the primary's record.

        Returns:
            New matches, in ``aux_files`` order; files that derive from no
            primary are not included
        """
        primaries = [m for m in primary_matches if m.candidate is not None]
        primary_files = {m.file for m in primary_matches}
        additions = []

        for aux in aux_files:
            if aux in primary_files:
                continue
            for match in primaries:
                if self.is_derived_file(aux, match.file):
                    additions.append(Match(aux, match.candidate.clone(), match.score))
                    break

        logger.debug("Linked %d of %d auxiliary files", len(additions), len(aux_files))
        return additions
