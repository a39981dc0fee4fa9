"""File-to-candidate assignment.

Every (file, candidate) pair is scored by a composite of numbering
equality, title similarity and air date proximity. Pairs are then
assigned greedily by descending score, one-to-one. The pass is a pure
function: strict-mode ties are reported in the returned outcome, never
raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mediamatch.config.models.matching_settings import EpisodeMatchingSettings
from mediamatch.core.matching.models import (
    Ambiguity,
    MatchFeatures,
    MatchingOutcome,
    ScoredPair,
)
from mediamatch.core.models import (
    AudioTrack,
    Candidate,
    Episode,
    Match,
    MediaFile,
    Movie,
    SubtitleDescriptor,
)
from mediamatch.core.naming import strip_release_info
from mediamatch.core.numbering import extract_airdate, find_numbering
from mediamatch.core.similarity import similarity
from mediamatch.shared.constants.filename_patterns import AIRDATE_PATTERN

logger = logging.getLogger(__name__)

Matchable = Candidate | SubtitleDescriptor


def name_features(name: str, *, strict: bool = False) -> MatchFeatures:
    """Features of a release name: title, numbering and air date.

    The numbering and air date text are cut out of the title so that they
    do not dilute the title similarity. A bare number such as ``102`` is
    also kept as an absolute episode number.
    """
    cleaned = strip_release_info(name)
    found = find_numbering(cleaned, strict=strict)
    numbering = None
    absolute = None
    spans = []
    if found is not None:
        numbering = tuple(found.numbering)
        spans.append((found.start, found.end))
        number_text = cleaned[found.start : found.end]
        if number_text.isdigit():
            absolute = int(number_text)
    airdate_match = AIRDATE_PATTERN.search(cleaned)
    if airdate_match is not None:
        spans.append(airdate_match.span())

    title = cleaned
    for start, end in sorted(spans, reverse=True):
        title = f"{title[:start]} {title[end:]}"
    return MatchFeatures(
        title=" ".join(title.split()) or None,
        numbering=numbering,
        airdate=extract_airdate(name),
        absolute=absolute,
    )


def candidate_features(candidate: Matchable, *, strict: bool = False) -> MatchFeatures:
    """Features of a candidate record, per variant."""
    if isinstance(candidate, Episode):
        return MatchFeatures(
            title=f"{candidate.series_name} {candidate.title}".strip(),
            numbering=candidate.season_episode,
            airdate=candidate.airdate,
            absolute=candidate.absolute,
        )
    if isinstance(candidate, Movie):
        title = f"{candidate.name} {candidate.year}" if candidate.year else candidate.name
        return MatchFeatures(title=title)
    if isinstance(candidate, AudioTrack):
        return MatchFeatures(title=f"{candidate.artist} {candidate.title}")
    return name_features(candidate.name, strict=strict)


class EpisodeMatcher:
    """Assign files to candidate records one-to-one.

    Works over any candidate variant (episodes, movies, tracks, subtitle
    descriptors); only the features present on both sides of a pair are
    scored.

    Args:
        settings: Weights, acceptance score and tie margin

    Example:
        >>> matcher = EpisodeMatcher()
        >>> files = [MediaFile.of("/tv/Show.Name.S01E02.mkv")]
        >>> episodes = [Episode("Show Name", 1, 1), Episode("Show Name", 1, 2)]
        >>> outcome = matcher.match(files, episodes, strict=True)
        >>> outcome.matches[0].candidate.episode
        2
    """

    component_name = "episode_matcher"

    def __init__(self, settings: EpisodeMatchingSettings | None = None) -> None:
        self.settings = settings or EpisodeMatchingSettings()

    def score(self, file_features: MatchFeatures, candidate_features: MatchFeatures) -> float:
        """Composite score of a pair in [0, 1].

        A numbering present on both sides that differs scores 0. Absolute
        numbers are compared only when the candidate has no season and
        episode.
        """
        weighted = 0.0
        total_weight = 0.0

        if file_features.numbering is not None and candidate_features.numbering is not None:
            if tuple(file_features.numbering) != tuple(candidate_features.numbering):
                return 0.0
            weighted += self.settings.numbering_weight
            total_weight += self.settings.numbering_weight
        elif file_features.absolute is not None and candidate_features.absolute is not None:
            if file_features.absolute != candidate_features.absolute:
                return 0.0
            weighted += self.settings.numbering_weight
            total_weight += self.settings.numbering_weight

        if file_features.title and candidate_features.title:
            weighted += self.settings.title_weight * similarity(
                file_features.title,
                candidate_features.title,
                self.settings.edit_weight,
            )
            total_weight += self.settings.title_weight

        if file_features.airdate is not None and candidate_features.airdate is not None:
            days = abs((file_features.airdate - candidate_features.airdate).days)
            proximity = max(0.0, 1.0 - days / self.settings.airdate_window_days)
            weighted += self.settings.airdate_weight * proximity
            total_weight += self.settings.airdate_weight

        if total_weight <= 0:
            return 0.0
        return round(weighted / total_weight, 4)

    def score_pairs(
        self,
        files: Sequence[MediaFile],
        candidates: Sequence[Matchable],
        *,
        strict: bool,
    ) -> list[ScoredPair]:
        """Acceptable pairs sorted by score, then file and candidate order."""
        file_features = [name_features(f.stem, strict=strict) for f in files]
        cand_features = [candidate_features(c, strict=strict) for c in candidates]

        pairs = []
        for i, ff in enumerate(file_features):
            for j, cf in enumerate(cand_features):
                value = self.score(ff, cf)
                if value >= self.settings.min_score:
                    pairs.append(ScoredPair(i, j, value))

        pairs.sort(key=lambda p: (-p.score, p.file_index, p.candidate_index))
        return pairs

    def match(
        self,
        files: Sequence[MediaFile],
        candidates: Sequence[Matchable],
        *,
        strict: bool,
    ) -> MatchingOutcome:
        """Run one matching pass.

        Args:
            files: Files to resolve
            candidates: Candidate records
            strict: Report ties within ``tie_margin`` as ambiguity instead
                    of breaking them by first-seen order

        Returns:
            Matches and unmatched files in input order, plus the
            ambiguity that stopped a strict pass, if any
        """
        pairs = self.score_pairs(files, candidates, strict=strict)

        assigned: dict[int, ScoredPair] = {}
        used_candidates: set[int] = set()

        for pair in pairs:
            if pair.file_index in assigned or pair.candidate_index in used_candidates:
                continue

            if strict:
                rival = self._find_rival(pair, pairs, candidates, used_candidates)
                if rival is not None:
                    ambiguity = Ambiguity(
                        file=files[pair.file_index],
                        first=candidates[pair.candidate_index],
                        second=candidates[rival.candidate_index],
                        score=pair.score,
                    )
                    logger.debug("Ambiguous match: %s", ambiguity.describe())
                    return MatchingOutcome(
                        matches=[],
                        unmatched=list(files),
                        ambiguity=ambiguity,
                    )

            assigned[pair.file_index] = pair
            used_candidates.add(pair.candidate_index)

        matches = []
        unmatched = []
        for i, file in enumerate(files):
            pair = assigned.get(i)
            if pair is None:
                unmatched.append(file)
            else:
                matches.append(Match(file, candidates[pair.candidate_index], pair.score))

        logger.debug(
            "Matched %d of %d files against %d candidates",
            len(matches),
            len(files),
            len(candidates),
        )
        return MatchingOutcome(matches=matches, unmatched=unmatched)

    def _find_rival(
        self,
        pair: ScoredPair,
        pairs: Sequence[ScoredPair],
        candidates: Sequence[Matchable],
        used_candidates: set[int],
    ) -> ScoredPair | None:
        chosen = candidates[pair.candidate_index]
        for other in pairs:
            if other.score < pair.score - self.settings.tie_margin:
                break
            if (
                other.file_index == pair.file_index
                and other.candidate_index != pair.candidate_index
                and other.candidate_index not in used_candidates
                and candidates[other.candidate_index] != chosen
            ):
                return other
        return None
