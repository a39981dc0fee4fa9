"""Candidate selection for free-text queries.

The selector narrows the identities returned by a provider search to the
ones that plausibly correspond to the query. It is the single place where
"too many plausible matches" becomes a failure instead of a best guess.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mediamatch.config.models.matching_settings import SelectionSettings
from mediamatch.core.matching.models import ScoredSearchResult
from mediamatch.core.models import SearchResult
from mediamatch.core.similarity import DEFAULT_EDIT_WEIGHT, normalize_name, similarity
from mediamatch.shared.errors import (
    create_ambiguous_selection_error,
    create_invalid_query_error,
    create_no_match_error,
)

logger = logging.getLogger(__name__)


class CandidateSelector:
    """Filter, rank and select search results for a query.

    Policy:
        - A result is accepted when its similarity reaches the floor
          (``strict_similarity_floor`` in strict mode with more than one
          result, ``similarity_floor`` otherwise), or when one of its
          names starts with the query and either strict mode is off or
          the similarity reaches ``prefix_similarity_floor``.
        - Nothing accepted: a single result passes through; in non-strict
          mode up to ``max_results`` results pass through unranked;
          otherwise the selection fails.
        - Something accepted: strict mode requires exactly one; non-strict
          mode returns the best ``max_results``.

    Args:
        settings: Selection thresholds
        edit_weight: Similarity blend weight

    Example:
        >>> selector = CandidateSelector()
        >>> results = [SearchResult(id=1, name="The Matrix", kind="movie")]
        >>> [r.name for r in selector.select("Matrix", results, strict=False)]
        ['The Matrix']
    """

    component_name = "selector"

    def __init__(
        self,
        settings: SelectionSettings | None = None,
        edit_weight: float = DEFAULT_EDIT_WEIGHT,
    ) -> None:
        self.settings = settings or SelectionSettings()
        self.edit_weight = edit_weight

    def score(self, query: str | None, result: SearchResult) -> ScoredSearchResult:
        """Score one result against the query.

        A None query scores 1.0 for every result.
        """
        if query is None:
            return ScoredSearchResult(result=result, similarity=1.0)

        normalized_query = normalize_name(query)
        best = 0.0
        prefix = False
        for name in result.effective_names:
            best = max(best, similarity(query, name, self.edit_weight))
            if normalized_query and normalize_name(name).startswith(normalized_query):
                prefix = True
        return ScoredSearchResult(result=result, similarity=best, prefix_match=prefix)

    def rank(
        self,
        query: str | None,
        results: Sequence[SearchResult],
        *,
        strict: bool,
    ) -> list[ScoredSearchResult]:
        """Accepted results sorted by descending similarity (stable)."""
        floor = (
            self.settings.strict_similarity_floor
            if strict and len(results) > 1
            else self.settings.similarity_floor
        )

        accepted = []
        for result in results:
            scored = self.score(query, result)
            if scored.similarity >= floor or (
                scored.prefix_match
                and (not strict or scored.similarity >= self.settings.prefix_similarity_floor)
            ):
                accepted.append(scored)

        accepted.sort(key=lambda s: s.similarity, reverse=True)
        return accepted

    def select(
        self,
        query: str | None,
        results: Sequence[SearchResult],
        *,
        strict: bool,
        operation: str = "select",
    ) -> list[SearchResult]:
        """Select the results that plausibly correspond to ``query``.

        Args:
            query: Free-text query, or None when the identity is already
                   disambiguated (e.g. by hash lookup)
            results: Raw provider results; duplicates by id are dropped
            strict: Require a single unambiguous selection
            operation: Operation name recorded in error context

        Returns:
            Selected results, best first

        Raises:
            InvalidQueryError: If ``query`` is blank
            NoMatchError: If nothing can be selected
            AmbiguousSelectionError: If strict mode cannot pick exactly one
        """
        if query is not None and not query.strip():
            raise create_invalid_query_error("Query must not be blank", operation=operation)

        unique = list(dict.fromkeys(results))
        if not unique:
            raise create_no_match_error(
                f"No search results for '{query}'",
                query=query,
                operation=operation,
            )

        accepted = self.rank(query, unique, strict=strict)
        logger.debug(
            "Selection for %r: %d of %d results accepted (strict=%s)",
            query,
            len(accepted),
            len(unique),
            strict,
        )

        if not accepted:
            if len(unique) == 1:
                return unique
            if not strict and len(unique) <= self.settings.max_results:
                return unique
            if strict:
                raise create_ambiguous_selection_error(
                    f"No unambiguous match for '{query}' among {len(unique)} results",
                    query=query,
                    candidate_count=len(unique),
                    operation=operation,
                )
            raise create_no_match_error(
                f"No plausible match for '{query}' among {len(unique)} results",
                query=query,
                operation=operation,
            )

        if strict:
            if len(accepted) != 1:
                names = ", ".join(s.result.name for s in accepted)
                raise create_ambiguous_selection_error(
                    f"Multiple results match '{query}': {names}",
                    query=query,
                    candidate_count=len(accepted),
                    operation=operation,
                )
            return [accepted[0].result]

        return [s.result for s in accepted[: self.settings.max_results]]
