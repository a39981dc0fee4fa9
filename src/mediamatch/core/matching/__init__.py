"""Matching module for mediamatch.

This module provides candidate selection for free-text queries and the
one-to-one assignment of files to candidate records.
"""

from .episode_matcher import EpisodeMatcher
from .models import MatchingOutcome
from .selector import CandidateSelector

__all__ = [
    "CandidateSelector",
    "EpisodeMatcher",
    "MatchingOutcome",
]
