"""Tests for the file-to-candidate matcher."""

from datetime import date

import pytest

from mediamatch.core.matching.episode_matcher import (
    EpisodeMatcher,
    candidate_features,
    name_features,
)
from mediamatch.core.matching.models import MatchFeatures
from mediamatch.core.models import Episode, MediaFile, Movie, SubtitleDescriptor
from mediamatch.shared.errors import AmbiguousMatchError, ErrorCode


def _files(*names):
    return [MediaFile.of(f"/tv/{name}") for name in names]


@pytest.fixture
def matcher():
    return EpisodeMatcher()


class TestFeatures:
    """Test feature extraction on both sides of a pair."""

    def test_numbering_removed_from_title(self):
        features = name_features("Show.Name.S01E02.720p.HDTV")
        assert features.numbering == (1, 2)
        assert features.title == "Show Name"
        assert features.airdate is None

    def test_airdate_extracted(self):
        features = name_features("Daily.Show.2012.05.21")
        assert features.airdate == date(2012, 5, 21)

    def test_airdate_removed_from_title(self):
        features = name_features("The.Daily.Show.2012.05.21.Jon.Stewart")
        assert features.title == "The Daily Show Jon Stewart"

    def test_bare_number_kept_as_absolute(self):
        features = name_features("[Grp] One Piece - 102 [1080p]")
        assert features.numbering == (1, 2)
        assert features.absolute == 102
        assert features.title == "One Piece"
        assert name_features("Show.Name.S01E02").absolute is None

    def test_episode_features(self):
        features = candidate_features(Episode("Show Name", 1, 2, "Pilot"))
        assert features.numbering == (1, 2)
        assert features.title == "Show Name Pilot"

    def test_movie_features_include_year(self):
        assert candidate_features(Movie("The Matrix", 1999)).title == "The Matrix 1999"


class TestScore:
    """Test the composite pair score."""

    def test_numbering_mismatch_scores_zero(self, matcher):
        left = MatchFeatures(title="Show", numbering=(1, 1))
        right = MatchFeatures(title="Show", numbering=(1, 2))
        assert matcher.score(left, right) == 0.0

    def test_only_shared_components_count(self, matcher):
        left = MatchFeatures(numbering=(1, 1))
        right = MatchFeatures(title="Show", numbering=(1, 1))
        assert matcher.score(left, right) == 1.0

    def test_nothing_shared(self, matcher):
        assert matcher.score(MatchFeatures(title="Show"), MatchFeatures(numbering=(1, 1))) == 0.0

    def test_airdate_proximity_decays(self, matcher):
        same_day = matcher.score(
            MatchFeatures(airdate=date(2012, 5, 21)),
            MatchFeatures(airdate=date(2012, 5, 21)),
        )
        week_later = matcher.score(
            MatchFeatures(airdate=date(2012, 5, 21)),
            MatchFeatures(airdate=date(2012, 5, 28)),
        )
        assert same_day == 1.0
        assert week_later == 0.0


class TestMatch:
    """Test matching passes."""

    def test_strict_round_trip(self, matcher):
        files = _files("Show.Name.S01E02.mkv")
        episodes = [Episode("Show Name", 1, 1), Episode("Show Name", 1, 2)]

        outcome = matcher.match(files, episodes, strict=True)

        assert not outcome.is_ambiguous
        assert len(outcome.matches) == 1
        assert outcome.matches[0].candidate is episodes[1]
        assert outcome.unmatched == []
        assert outcome.matches[0].score >= 0.8

    def test_one_to_one_assignment(self, matcher):
        files = _files("Show.Name.S01E01.mkv", "Show.Name.S01E02.mkv", "Show.Name.S01E01.PROPER.mkv")
        episodes = [Episode("Show Name", 1, 1, "Pilot"), Episode("Show Name", 1, 2, "Second")]

        outcome = matcher.match(files, episodes, strict=False)

        candidates = [m.candidate for m in outcome.matches]
        assert len(candidates) == len(set(map(id, candidates)))
        assert [m.file.name for m in outcome.matches] == [
            "Show.Name.S01E01.mkv",
            "Show.Name.S01E02.mkv",
        ]
        assert [f.name for f in outcome.unmatched] == ["Show.Name.S01E01.PROPER.mkv"]

    def test_results_in_input_order(self, matcher):
        files = _files("Show.Name.S01E02.mkv", "Show.Name.S01E01.mkv")
        episodes = [Episode("Show Name", 1, 1), Episode("Show Name", 1, 2)]

        outcome = matcher.match(files, episodes, strict=True)

        assert [m.file for m in outcome.matches] == files
        assert [m.candidate.episode for m in outcome.matches] == [2, 1]

    def test_unmatched_file(self, matcher):
        files = _files("Show.Name.S05E09.mkv")
        outcome = matcher.match(files, [Episode("Show Name", 1, 1)], strict=True)
        assert outcome.matches == []
        assert outcome.unmatched == files

    def test_strict_tie_reported(self, matcher):
        files = _files("Show.Name.S01E01.mkv")
        episodes = [Episode("Show Name", 1, 1, series_id=1), Episode("Show Name", 1, 1, series_id=2)]

        outcome = matcher.match(files, episodes, strict=True)

        assert outcome.is_ambiguous
        assert outcome.matches == []
        assert outcome.unmatched == files
        assert outcome.ambiguity.second is episodes[1]
        with pytest.raises(AmbiguousMatchError) as exc_info:
            outcome.raise_for_ambiguity(operation="match_series")
        assert exc_info.value.code is ErrorCode.AMBIGUOUS_MATCH

    def test_lenient_tie_takes_first(self, matcher):
        files = _files("Show.Name.S01E01.mkv")
        episodes = [Episode("Show Name", 1, 1, series_id=1), Episode("Show Name", 1, 1, series_id=2)]

        outcome = matcher.match(files, episodes, strict=False)

        assert not outcome.is_ambiguous
        assert outcome.matches[0].candidate is episodes[0]

    def test_equal_candidates_are_not_a_tie(self, matcher):
        files = _files("Show.Name.S01E01.mkv")
        episodes = [Episode("Show Name", 1, 1), Episode("Show Name", 1, 1)]

        outcome = matcher.match(files, episodes, strict=True)

        assert not outcome.is_ambiguous
        assert outcome.matches[0].candidate is episodes[0]

    def test_airdate_match(self, matcher):
        files = _files("Daily.Show.2012.05.21.mkv")
        episodes = [
            Episode("Daily Show", None, None, airdate=date(2012, 5, 28)),
            Episode("Daily Show", None, None, airdate=date(2012, 5, 21)),
        ]

        outcome = matcher.match(files, episodes, strict=True)

        assert outcome.matches[0].candidate is episodes[1]

    def test_absolute_numbering(self, matcher):
        files = _files("[Grp] One Piece - 102 [1080p].mkv")
        episodes = [
            Episode("One Piece", None, None, absolute=2),
            Episode("One Piece", None, None, absolute=102),
        ]

        outcome = matcher.match(files, episodes, strict=False)

        assert outcome.matches[0].candidate is episodes[1]

    def test_movies(self, matcher):
        files = _files("The.Matrix.1999.1080p.BluRay.mkv")
        movies = [Movie("The Matrix Reloaded", 2003), Movie("The Matrix", 1999)]

        outcome = matcher.match(files, movies, strict=True)

        assert outcome.matches[0].candidate is movies[1]

    def test_subtitle_descriptors(self, matcher):
        files = _files("Show.Name.S01E02.720p.mkv")
        descriptors = [
            SubtitleDescriptor("Show Name S01E01", "eng", "fake"),
            SubtitleDescriptor("Show Name S01E02", "eng", "fake"),
        ]

        outcome = matcher.match(files, descriptors, strict=True)

        assert outcome.matches[0].candidate is descriptors[1]
