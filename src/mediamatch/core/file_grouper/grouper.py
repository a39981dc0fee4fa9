"""Batch grouping for mediamatch.

Partitions a file batch so that identity lookups are issued once per
group instead of once per file. Identities come from an explicit query,
from detected series names, or, failing both, from the containing
folder.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from mediamatch.config.models.matching_settings import DetectionSettings
from mediamatch.core.file_grouper.models import Group, GroupingEvidence
from mediamatch.core.models import MediaFile
from mediamatch.core.naming import strip_release_info
from mediamatch.core.series_name_matcher import SeriesNameMatcher
from mediamatch.shared.errors import create_invalid_query_error

logger = logging.getLogger(__name__)


def split_query(query: str) -> list[str]:
    """Split a ``|`` separated query into its non-blank parts."""
    return [part.strip() for part in query.split("|") if part.strip()]


class BatchGrouper:
    """Group files by inferred series identity.

    Rules, applied per file in input order:

    1. An explicit query puts every file into one group.
    2. A detected series name (longest common word sequence anchor, else
       the text before the numbering pattern) names the group. Names
       longer than ``min_common_words`` tokens are confident and group
       files across folders; shorter names are scoped to the folder.
    3. Files without a name form one group per folder.

    Group order and membership depend only on the input order.

    Example:
        >>> grouper = BatchGrouper()
        >>> files = [MediaFile.of("/tv/a/Show.Name.S01E01.mkv"),
        ...          MediaFile.of("/tv/b/Show.Name.S01E02.mkv")]
        >>> list(grouper.group(files))
        ['show name']
    """

    component_name = "batch_grouper"

    def __init__(
        self,
        series_name_matcher: SeriesNameMatcher | None = None,
        settings: DetectionSettings | None = None,
    ) -> None:
        self.settings = settings or (
            series_name_matcher.settings if series_name_matcher else DetectionSettings()
        )
        self.series_name_matcher = series_name_matcher or SeriesNameMatcher(self.settings)

    def group(self, files: Sequence[MediaFile], query: str | None = None) -> dict[str, Group]:
        """Partition ``files`` into groups keyed by identity.

        Args:
            files: Files in input order
            query: Optional explicit query, ``|`` separates alternatives

        Returns:
            Ordered mapping from identity key to group

        Raises:
            InvalidQueryError: If ``query`` is given but blank
        """
        if query is not None:
            queries = split_query(query)
            if not queries:
                raise create_invalid_query_error("Query must not be blank", operation="group")
            return {
                query.strip().lower(): Group(
                    title=query.strip(),
                    files=list(files),
                    queries=queries,
                    evidence=GroupingEvidence("query", f"Explicit query '{query.strip()}'"),
                )
            }

        matcher = self.series_name_matcher
        anchors = matcher.match_all([f.name for f in files])
        groups: dict[str, Group] = {}

        for file in files:
            anchor = matcher.anchor_for(file.name, anchors)
            name = anchor or matcher.series_name_prefix(file.name)

            if name:
                key, group = self._name_group(groups, name, file.parent, from_anchor=anchor is not None)
            else:
                key, group = self._folder_group(groups, file.parent)

            groups.setdefault(key, group).add_file(file)

        logger.debug("Grouped %d files into %d groups", len(files), len(groups))
        return groups

    def _name_group(
        self,
        groups: dict[str, Group],
        name: str,
        folder: Path,
        *,
        from_anchor: bool,
    ) -> tuple[str, Group]:
        confident = len(name.split()) > self.settings.min_common_words
        key = name.lower() if confident else f"{name.lower()} [{folder}]"
        if key in groups:
            return key, groups[key]

        source = "Common word sequence" if from_anchor else "Series name"
        return key, Group(
            title=name,
            queries=[name],
            evidence=GroupingEvidence("series_name", f"{source} '{name}'", confident=confident),
        )

    def _folder_group(self, groups: dict[str, Group], folder: Path) -> tuple[str, Group]:
        key = str(folder)
        if key in groups:
            return key, groups[key]

        folder_name = strip_release_info(folder.name)
        return key, Group(
            title=folder_name or key,
            queries=[folder_name] if folder_name else [],
            evidence=GroupingEvidence("folder", f"Folder '{folder}'", confident=False),
        )
