"""Reduce findings to a compliance score and an outcome class."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from preflight.constants import EXIT_CODES, FAIR_PREFIXES, Outcome, Severity
from preflight.scoring.weights import DEFAULT_WEIGHTS, ScoringWeights
from preflight.validation.schemas import Finding

FAILURE_BELOW = 50
WARNING_BELOW = 80


class ComplianceScore(BaseModel):
    """Total (0-100), four FAIR sub-scores (0-25 each), severity counts."""

    model_config = ConfigDict(frozen=True)

    total: int
    findable: int
    accessible: int
    interoperable: int
    reusable: int
    critical_count: int
    warning_count: int
    info_count: int


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


def score(
    findings: Iterable[Finding], weights: ScoringWeights = DEFAULT_WEIGHTS
) -> ComplianceScore:
    """Compute the compliance score. Pure; the input is not modified.

    total = clamp(100 - 20*critical - 5*warning - 1*info, 0, 100)

    Each sub-score starts at 25 and is reduced (10/3/1 per severity)
    only by findings whose code carries that dimension's prefix.
    """
    overall: Counter[Severity] = Counter()
    per_dim: dict[str, Counter[Severity]] = {
        dim: Counter() for dim in FAIR_PREFIXES
    }
    for finding in findings:
        overall[finding.severity] += 1
        dim = finding.dimension
        if dim is not None:
            per_dim[dim][finding.severity] += 1

    total = _clamp(
        weights.total_start
        - weights.total_critical * overall[Severity.CRITICAL]
        - weights.total_warning * overall[Severity.WARNING]
        - weights.total_info * overall[Severity.INFO],
        weights.total_start,
    )
    subs = {
        dim: _clamp(
            weights.dimension_start
            - weights.dimension_critical * counts[Severity.CRITICAL]
            - weights.dimension_warning * counts[Severity.WARNING]
            - weights.dimension_info * counts[Severity.INFO],
            weights.dimension_start,
        )
        for dim, counts in per_dim.items()
    }
    return ComplianceScore(
        total=total,
        findable=subs["findable"],
        accessible=subs["accessible"],
        interoperable=subs["interoperable"],
        reusable=subs["reusable"],
        critical_count=overall[Severity.CRITICAL],
        warning_count=overall[Severity.WARNING],
        info_count=overall[Severity.INFO],
    )


def classify_outcome(result: ComplianceScore) -> Outcome:
    """Failure on any critical finding or total < 50; warning on any
    warning or total < 80; success otherwise."""
    if result.critical_count > 0 or result.total < FAILURE_BELOW:
        return Outcome.FAILURE
    if result.total < WARNING_BELOW or result.warning_count > 0:
        return Outcome.WARNING
    return Outcome.SUCCESS


def exit_code(result: ComplianceScore) -> int:
    return EXIT_CODES[classify_outcome(result)]
