"""Batch grouping module for mediamatch.

Groups files by detected series name or folder so identity lookups
happen once per group.
"""

from .grouper import BatchGrouper, split_query
from .models import Group, GroupingEvidence

__all__ = ["BatchGrouper", "Group", "GroupingEvidence", "split_query"]
