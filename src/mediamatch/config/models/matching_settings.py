"""Matching policy configuration models.

This module contains the tunable thresholds used by the candidate
selector, the batch mode detection and the file matcher. Defaults
reproduce the historical constants (0.8 / 0.6 / 0.5, top 5, 65%,
batches of at least 5 files).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class SelectionSettings(BaseModel):
    """Candidate selector thresholds.

    Attributes:
        strict_similarity_floor: Acceptance floor in strict mode when more
            than one result is under consideration.
        similarity_floor: Acceptance floor otherwise.
        prefix_similarity_floor: Lower bound for prefix matches in strict mode.
        max_results: Cap on results returned in non-strict mode, also the
            largest raw result list passed through unfiltered.

    Example:
        >>> SelectionSettings().strict_similarity_floor
        0.8
    """

    strict_similarity_floor: float = Field(default=0.8, ge=0.0, le=1.0)
    similarity_floor: float = Field(default=0.6, ge=0.0, le=1.0)
    prefix_similarity_floor: float = Field(default=0.5, ge=0.0, le=1.0)
    max_results: int = Field(default=5, ge=1, le=100)


class DetectionSettings(BaseModel):
    """Series-vs-movie detection and common word sequence settings."""

    episode_ratio_threshold: float = Field(
        default=0.65,
        ge=0.0,
        le=1.0,
        description="Fraction of episode-like files above which a batch is episodic",
    )
    min_batch_size: int = Field(
        default=5,
        ge=2,
        description="Smallest batch for which common word sequences are computed",
    )
    min_common_words: int = Field(
        default=1,
        ge=0,
        description="A shared leading token run must be longer than this",
    )


class EpisodeMatchingSettings(BaseModel):
    """File-to-candidate scoring settings.

    The composite score is the weighted average of the components that
    are available for a pair, so weights need not sum to one.
    """

    numbering_weight: float = Field(default=0.6, ge=0.0)
    title_weight: float = Field(default=0.3, ge=0.0)
    airdate_weight: float = Field(default=0.1, ge=0.0)
    min_score: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Pairs scoring below this are never assigned",
    )
    tie_margin: float = Field(
        default=0.01,
        ge=0.0,
        le=1.0,
        description="Score difference treated as indistinguishable in strict mode",
    )
    airdate_window_days: int = Field(default=7, ge=1)
    edit_weight: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Share of edit-distance ratio in the similarity blend",
    )

    @model_validator(mode="after")
    def validate_weights(self) -> EpisodeMatchingSettings:
        """Require at least one positive weight."""
        if self.numbering_weight + self.title_weight + self.airdate_weight <= 0:
            msg = "At least one matching weight must be positive"
            raise ValueError(msg)
        return self


__all__ = [
    "DetectionSettings",
    "EpisodeMatchingSettings",
    "SelectionSettings",
]
