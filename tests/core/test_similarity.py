"""Tests for the name similarity metric."""

import pytest

from mediamatch.core.similarity import normalize_name, similarity


class TestNormalizeName:
    """Test cases for name normalization."""

    def test_separators_are_equivalent(self):
        """Dots, underscores, dashes and spaces normalize the same way."""
        assert normalize_name("Show.Name") == "show name"
        assert normalize_name("Show_Name") == "show name"
        assert normalize_name("Show - Name") == "show name"

    def test_punctuation_removed(self):
        """Punctuation does not survive normalization."""
        assert normalize_name("The Office (US)") == "the office us"


class TestSimilarity:
    """Test cases for similarity()."""

    def test_empty_strings(self):
        """Two empty strings are identical, empty vs non-empty is not."""
        assert similarity("", "") == 1.0
        assert similarity("", "Show") == 0.0
        assert similarity("Show", "") == 0.0

    def test_case_and_separator_insensitive(self):
        """Case and separators do not affect the score."""
        assert similarity("The.Office", "the office") == 1.0
        assert similarity("breaking_bad", "Breaking Bad") == 1.0

    def test_symmetric(self):
        """Argument order does not matter."""
        pairs = [("Matrix", "The Matrix"), ("Office", "Office (US)"), ("Lost", "Lost Girl")]
        for a, b in pairs:
            assert similarity(a, b) == similarity(b, a)

    def test_range_and_stability(self):
        """Scores are in [0, 1] and repeatable."""
        score = similarity("Game of Thrones", "Throne of Games")
        assert 0.0 <= score <= 1.0
        assert similarity("Game of Thrones", "Throne of Games") == score

    def test_better_match_scores_higher(self):
        """An obviously better candidate scores higher."""
        assert similarity("Breaking Bad", "Breaking Bad") > similarity("Breaking Bad", "Breaking Point")
        assert similarity("Breaking Bad", "Breaking Point") > similarity("Breaking Bad", "Friends")

    def test_qualified_name_scores_high(self):
        """A name with a country qualifier stays above the strict floor."""
        assert similarity("Office", "Office (US)") >= 0.8
        assert similarity("Office", "Office (US)") == pytest.approx(similarity("Office", "Office (UK)"))

    def test_edit_weight_extremes(self):
        """Edit weight 1.0 uses only the edit ratio, 0.0 only token overlap."""
        assert similarity("Matrix", "The Matrix", edit_weight=0.0) == 1.0
        assert similarity("Matrix", "The Matrix", edit_weight=1.0) < 1.0
