"""Name similarity metric.

Blends the normalized edit-distance ratio with token-set overlap, both
computed by rapidfuzz over normalized strings. The score is symmetric,
deterministic and in ``[0, 1]``.
"""

from __future__ import annotations

import re
import unicodedata

from rapidfuzz import fuzz

DEFAULT_EDIT_WEIGHT = 0.5

_NON_WORD = re.compile(r"[^\w\s]")
_SEPARATORS = re.compile(r"[\s_]+")


def normalize_name(name: str) -> str:
    """Normalize a name for comparison.

    NFKC normalization, lower case, punctuation and separators collapsed
    to single spaces.

    Example:
        >>> normalize_name("Show.Name_-_(US)")
        'show name us'
    """
    text = unicodedata.normalize("NFKC", name).lower()
    text = _NON_WORD.sub(" ", text)
    return _SEPARATORS.sub(" ", text).strip()


def similarity(a: str, b: str, edit_weight: float = DEFAULT_EDIT_WEIGHT) -> float:
    """Score how similar two names are.

    Args:
        a: First name
        b: Second name
        edit_weight: Share of the edit-distance ratio in the blend; the
                     remainder goes to token-set overlap

    Returns:
        Similarity in [0.0, 1.0]. Two empty strings score 1.0, an empty
        string against a non-empty one scores 0.0.

    Example:
        >>> similarity("The.Office", "the office")
        1.0
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    left = normalize_name(a)
    right = normalize_name(b)
    if left == right:
        return 1.0
    if not left or not right:
        return 0.0

    edit_weight = min(max(edit_weight, 0.0), 1.0)
    edit_score = fuzz.ratio(left, right) / 100.0
    token_score = fuzz.token_set_ratio(left, right) / 100.0

    score = edit_weight * edit_score + (1.0 - edit_weight) * token_score
    return round(min(max(score, 0.0), 1.0), 4)
