"""Tests for series name detection and batch classification."""

from pathlib import Path

import pytest

from mediamatch.config.models.matching_settings import DetectionSettings
from mediamatch.core.models import MediaFile, MediaMode
from mediamatch.core.series_name_matcher import SeriesNameMatcher, name_tokens


def _files(names, folder="/media/library"):
    return [MediaFile(path=Path(folder) / name) for name in names]


class TestNameTokens:
    """Test cases for name_tokens()."""

    def test_cut_before_numbering(self):
        assert name_tokens("Show.Name.S01E02.Pilot.720p.mkv") == ["Show", "Name"]

    def test_cut_before_airdate(self):
        assert name_tokens("Daily.Show.2012.05.21.mkv") == ["Daily", "Show"]

    def test_no_numbering(self):
        assert name_tokens("Some.Documentary.Part.One.mkv") == ["Some", "Documentary", "Part", "One"]


class TestCommonWordSequence:
    """Test cases for common word sequence detection."""

    def test_pair_match(self):
        """Two names sharing a leading run of two words match."""
        matcher = SeriesNameMatcher()
        assert matcher.match_by_first_common_word_sequence(
            "The.Office.S01E01.mkv", "the office s02e03.avi"
        ) == "The Office"

    def test_single_common_word_rejected(self):
        """A single shared word like 'The' is not enough."""
        matcher = SeriesNameMatcher()
        assert matcher.match_by_first_common_word_sequence("The.Wire.mkv", "The.Sopranos.mkv") is None

    def test_min_common_words_configurable(self):
        """Lowering the threshold accepts single words."""
        matcher = SeriesNameMatcher(DetectionSettings(min_common_words=0))
        assert matcher.match_by_first_common_word_sequence("The.Wire.mkv", "The.Sopranos.mkv") == "The"

    def test_match_all_requires_batch_size(self):
        """Fewer than five names produce no anchors."""
        matcher = SeriesNameMatcher()
        names = ["Nature Docs Oceans.mkv", "Nature Docs Forests.mkv", "Nature Docs Deserts.mkv"]
        assert matcher.match_all(names) == []

    def test_match_all_anchors(self):
        """Anchors keep first-seen order and original case."""
        matcher = SeriesNameMatcher()
        names = [
            "Nature Docs Oceans.mkv",
            "Nature Docs Forests.mkv",
            "Nature Docs Deserts.mkv",
            "City Lights Tokyo.mkv",
            "city lights Paris.mkv",
        ]
        assert matcher.match_all(names) == ["Nature Docs", "City Lights"]

    def test_anchor_for_prefers_longest(self):
        matcher = SeriesNameMatcher()
        anchors = ["Star Trek", "Star Trek Voyager"]
        assert matcher.anchor_for("Star.Trek.Voyager.S01E01.mkv", anchors) == "Star Trek Voyager"
        assert matcher.anchor_for("Star.Trek.S01E01.mkv", anchors) == "Star Trek"
        assert matcher.anchor_for("Stargate.S01E01.mkv", anchors) is None


class TestSeriesNamePrefix:
    """Test cases for per-file series name detection."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Show.Name.1x02.avi", "Show Name"),
            ("[Grp] Show Name - S01E02 [720p].mkv", "Show Name"),
            ("Movie.2020.mkv", None),
            ("S01E01.mkv", None),
        ],
    )
    def test_prefix(self, name, expected):
        assert SeriesNameMatcher().series_name_prefix(name) == expected

    def test_detect_series_names(self):
        matcher = SeriesNameMatcher()
        names = ["Show.Name.S01E01.mkv", "show.name.S01E02.mkv", "Other.Show.1x01.mkv"]
        assert matcher.detect_series_names(names) == ["Show Name", "Other Show"]


class TestClassify:
    """Test cases for the series-vs-movie decision."""

    def test_seven_of_ten_numbered_is_episodic(self):
        """7 of 10 files with SxxEyy exceed the 65% threshold."""
        names = [f"Show.S01E{i:02d}.mkv" for i in range(1, 8)]
        names += ["Alpha.2001.mkv", "Beta.2002.mkv", "Gamma.2003.mkv"]
        assert SeriesNameMatcher().classify(_files(names)) is MediaMode.EPISODE

    def test_six_of_ten_numbered_is_movie(self):
        """6 of 10 is below the threshold."""
        names = [f"Show.S01E{i:02d}.mkv" for i in range(1, 7)]
        names += ["Alpha.2001.mkv", "Beta.2002.mkv", "Gamma.2003.mkv", "Delta.2004.mkv"]
        assert SeriesNameMatcher().classify(_files(names)) is MediaMode.MOVIE

    def test_common_word_sequences_are_episodic(self):
        """Unnumbered files under one anchor count as episodes."""
        names = [f"Nature Docs Part {word}.mkv" for word in ("One", "Two", "Three", "Four", "Five")]
        assert SeriesNameMatcher().classify(_files(names)) is MediaMode.EPISODE

    def test_threshold_configurable(self):
        names = [f"Show.S01E{i:02d}.mkv" for i in range(1, 7)]
        names += ["Alpha.2001.mkv", "Beta.2002.mkv", "Gamma.2003.mkv", "Delta.2004.mkv"]
        matcher = SeriesNameMatcher(DetectionSettings(episode_ratio_threshold=0.5))
        assert matcher.classify(_files(names)) is MediaMode.EPISODE

    def test_numbered_subtitles_count_with_videos(self):
        """8 of 10 video and subtitle files carry SxxEyy."""
        names = ["Holiday.Video.mkv", "Birthday.Party.mkv"]
        names += [f"Show.Name.S01E{i:02d}.srt" for i in range(1, 9)]
        assert SeriesNameMatcher().classify(_files(names)) is MediaMode.EPISODE

    def test_all_audio_is_music(self):
        assert SeriesNameMatcher().classify(_files(["a.mp3", "b.flac"])) is MediaMode.MUSIC

    def test_single_movie(self):
        assert SeriesNameMatcher().classify(_files(["The.Matrix.1999.mkv"])) is MediaMode.MOVIE
