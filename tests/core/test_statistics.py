"""Tests for matching statistics."""

import logging

from mediamatch.core.statistics import MatchingMetrics, MatchingStatistics


class TestMatchingMetrics:
    def test_success_rate(self):
        assert MatchingMetrics(matched_files=3, unmatched_files=1).match_success_rate == 0.75

    def test_success_rate_empty(self):
        assert MatchingMetrics().match_success_rate == 0.0


class TestMatchingStatistics:
    """Test cases for the statistics collector."""

    def test_counters(self):
        stats = MatchingStatistics()
        stats.record_search()
        stats.record_search(failed=True)
        stats.record_selection(success=True)
        stats.record_selection(success=False)
        stats.record_matches(2, 1)
        stats.record_ambiguity_abort()

        summary = stats.summary()

        assert summary["searches"] == 2
        assert summary["lookup_errors"] == 1
        assert summary["selections"] == 1
        assert summary["failed_selections"] == 1
        assert summary["matched_files"] == 2
        assert summary["ambiguity_aborts"] == 1
        assert summary["match_success_rate"] == 0.6667

    def test_timing(self, mocker):
        mocker.patch("mediamatch.core.statistics.time.perf_counter", side_effect=[10.0, 12.5])
        stats = MatchingStatistics()

        stats.start_timing("match_series")
        duration = stats.end_timing("match_series")

        assert duration == 2.5
        assert stats.metrics.total_time == 2.5

    def test_end_without_start(self, caplog):
        stats = MatchingStatistics()
        with caplog.at_level(logging.WARNING):
            assert stats.end_timing("unknown") == 0.0
        assert "No timing started" in caplog.text

    def test_reset(self):
        stats = MatchingStatistics()
        stats.record_matches(5, 0)
        stats.reset()
        assert stats.summary()["matched_files"] == 0
