"""Performance configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PerformanceSettings(BaseModel):
    """Performance configuration.

    ``max_workers`` bounds how many groups are resolved concurrently.
    A value of 1 resolves groups sequentially.
    """

    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of groups whose lookups may run in parallel",
    )


__all__ = ["PerformanceSettings"]
