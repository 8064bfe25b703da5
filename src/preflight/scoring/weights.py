"""Scoring weights.

The total and the four FAIR sub-scores use different per-severity
deductions and are floored independently, so the sub-scores do not sum
to the total. The scorer consumes these configs directly.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringWeights:
    """Starting points and per-severity deductions."""

    total_start: int = 100
    total_critical: int = 20
    total_warning: int = 5
    total_info: int = 1

    dimension_start: int = 25
    dimension_critical: int = 10
    dimension_warning: int = 3
    dimension_info: int = 1


DEFAULT_WEIGHTS = ScoringWeights()
