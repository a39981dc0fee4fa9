"""Tests for season/episode numbering recognition."""

from datetime import date

import pytest

from mediamatch.core.numbering import (
    SeasonEpisode,
    extract_airdate,
    extract_numbering_pattern,
    find_numbering,
)


class TestExtractNumberingPattern:
    """Test cases for extract_numbering_pattern()."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Show.Name.S01E02.720p.mkv", (1, 2)),
            ("show name s1e2.avi", (1, 2)),
            ("Show Name S01.E02.mkv", (1, 2)),
            ("Show Name 1x02.mkv", (1, 2)),
            ("Show Name Season 2 Episode 10.mkv", (2, 10)),
            ("Show.Name.102.mkv", (1, 2)),
        ],
    )
    def test_recognized_patterns(self, name, expected):
        """Each supported pattern yields the right numbers."""
        assert extract_numbering_pattern(name) == expected

    def test_priority_order(self):
        """SxxEyy wins over a later three digit number."""
        assert extract_numbering_pattern("Show.S02E03.101.mkv") == (2, 3)

    def test_three_digit_only_outside_strict(self):
        """The three digit pattern is not used in strict mode."""
        assert extract_numbering_pattern("Show.Name.102.mkv", strict=True) is None

    @pytest.mark.parametrize(
        "name",
        [
            "Movie.2020.1080p.BluRay.x264.mkv",
            "Movie.720p.mkv",
            "Movie.H.264.mkv",
            "Movie.Title.mkv",
        ],
    )
    def test_no_false_positives(self, name):
        """Years, resolutions and codecs are not episode numbers."""
        assert extract_numbering_pattern(name) is None

    def test_result_type(self):
        """The result is a SeasonEpisode named tuple."""
        result = extract_numbering_pattern("Show.S03E04.mkv")
        assert isinstance(result, SeasonEpisode)
        assert result.season == 3
        assert result.episode == 4
        assert str(result) == "S03E04"

    def test_span(self):
        """find_numbering reports where the pattern sits."""
        found = find_numbering("Show Name S01E02 Pilot")
        assert found is not None
        assert "Show Name S01E02 Pilot"[found.start : found.end] == "S01E02"


class TestExtractAirdate:
    """Test cases for extract_airdate()."""

    def test_dotted_date(self):
        assert extract_airdate("Daily.Show.2012.05.21.mkv") == date(2012, 5, 21)

    def test_invalid_date_ignored(self):
        assert extract_airdate("Daily.Show.2012.13.45.mkv") is None

    def test_missing(self):
        assert extract_airdate("Show.S01E01.mkv") is None
