"""Scoring engine: findings to a reproducible compliance score."""

from preflight.scoring.scorer import (
    ComplianceScore,
    classify_outcome,
    exit_code,
    score,
)
from preflight.scoring.weights import DEFAULT_WEIGHTS, ScoringWeights

__all__ = [
    "DEFAULT_WEIGHTS",
    "ComplianceScore",
    "ScoringWeights",
    "classify_outcome",
    "exit_code",
    "score",
]
