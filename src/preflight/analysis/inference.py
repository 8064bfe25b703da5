"""Streaming column type inference and header detection.

Every data row contributes to per-column counters; nothing but the
counters (and a handful of sample values) is retained, so memory stays
proportional to the column count.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum

from preflight.constants import (
    BOOLEAN_LITERALS,
    DATE_NAME_TOKENS,
    FLOAT_NAME_TOKENS,
    HEADER_WORDS,
    MAX_SAMPLE_VALUES,
    SEMANTIC_BIAS_RATIO,
    STRING_NAME_TOKENS,
    TIMESTAMP_NAME_TOKENS,
    ZERO_ONE_LITERALS,
    ColumnType,
)

_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?"
    r"(Z|[+-]\d{2}:?\d{2})?$",
    re.ASCII,
)
_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_INTEGER_RE = re.compile(r"^-?\d+$", re.ASCII)
_FLOAT_RE = re.compile(r"^-?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$", re.ASCII)
_NAME_SPLIT_RE = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_HEADER_SPLIT_RE = re.compile(r"[_\- ]+")


class ValueKind(StrEnum):
    """Most specific pattern a single cell matches."""

    EMPTY = "empty"
    TIMESTAMP = "timestamp"
    DATE = "date"
    BOOLEAN = "boolean"
    ZERO_ONE = "zero_one"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"


def classify_value(raw: str) -> ValueKind:
    """Classify one cell, most specific pattern first."""
    value = raw.strip()
    if not value:
        return ValueKind.EMPTY
    if (m := _TIMESTAMP_RE.match(value)) and _valid_month_day(m):
        return ValueKind.TIMESTAMP
    if (m := _DATE_RE.match(value)) and _valid_month_day(m):
        return ValueKind.DATE
    if value.lower() in BOOLEAN_LITERALS:
        return ValueKind.BOOLEAN
    if value in ZERO_ONE_LITERALS:
        return ValueKind.ZERO_ONE
    if _INTEGER_RE.match(value):
        return ValueKind.INTEGER
    if _FLOAT_RE.match(value):
        return ValueKind.FLOAT
    return ValueKind.STRING


def _valid_month_day(match: re.Match[str]) -> bool:
    month, day = int(match.group(2)), int(match.group(3))
    return 1 <= month <= 12 and 1 <= day <= 31


def coarse_type(kind: ValueKind) -> ColumnType | None:
    """Collapse a cell kind into a column type (None for empty cells)."""
    match kind:
        case ValueKind.EMPTY:
            return None
        case ValueKind.ZERO_ONE:
            return ColumnType.INTEGER
        case _:
            return ColumnType(kind.value)


@dataclass
class ColumnStats:
    """Running counters for one column."""

    name: str
    index: int
    counts: Counter[ValueKind] = field(default_factory=lambda: Counter[ValueKind]())
    total: int = 0  # non-empty cells
    null_count: int = 0
    samples: list[str] = field(default_factory=lambda: list[str]())

    def add(self, raw: str) -> None:
        kind = classify_value(raw)
        if kind is ValueKind.EMPTY:
            self.null_count += 1
            return
        self.counts[kind] += 1
        self.total += 1
        value = raw.strip()
        if len(self.samples) < MAX_SAMPLE_VALUES and value not in self.samples:
            self.samples.append(value)

    def share(self, *kinds: ValueKind) -> float:
        if self.total == 0:
            return 0.0
        return sum(self.counts[k] for k in kinds) / self.total

    def suggests_numeric(self, threshold: float) -> bool:
        """Plain integers/floats dominate; 0/1 cells are ambiguous and excluded."""
        return self.share(ValueKind.INTEGER, ValueKind.FLOAT) >= threshold


def infer_type(
    stats: ColumnStats,
    threshold: float,
    numeric_elsewhere: bool = False,
) -> tuple[ColumnType, float]:
    """Resolve a column's type and confidence from its final counters.

    Precedence is Timestamp, Date, Boolean, Integer, Float, String. The
    first type whose matching share reaches ``threshold`` wins. ``0``/``1``
    cells count toward Boolean only when no other column in the file looks
    numeric; they always count toward Integer and Float. A semantic
    override on the column name beats the threshold result.
    """
    if stats.total == 0:
        return ColumnType.STRING, 0.0

    bool_kinds = (ValueKind.BOOLEAN,) if numeric_elsewhere else (
        ValueKind.BOOLEAN,
        ValueKind.ZERO_ONE,
    )
    candidates: list[tuple[ColumnType, tuple[ValueKind, ...]]] = [
        (ColumnType.TIMESTAMP, (ValueKind.TIMESTAMP,)),
        (ColumnType.DATE, (ValueKind.DATE,)),
        (ColumnType.BOOLEAN, bool_kinds),
        (ColumnType.INTEGER, (ValueKind.INTEGER, ValueKind.ZERO_ONE)),
        (
            ColumnType.FLOAT,
            (ValueKind.INTEGER, ValueKind.ZERO_ONE, ValueKind.FLOAT),
        ),
    ]
    inferred, confidence = ColumnType.STRING, 1.0
    for column_type, kinds in candidates:
        share = stats.share(*kinds)
        if share >= threshold:
            inferred, confidence = column_type, share
            break

    override = semantic_override(stats, threshold)
    if override is not None:
        return override
    return inferred, confidence


def semantic_override(
    stats: ColumnStats, threshold: float
) -> tuple[ColumnType, float] | None:
    """Type forced by the column name, if any."""
    tokens = set(name_tokens(stats.name))
    if not tokens:
        return None
    if tokens & STRING_NAME_TOKENS:
        # Identifiers keep leading zeros
        return ColumnType.STRING, 1.0
    ts_share = stats.share(ValueKind.TIMESTAMP)
    if tokens & TIMESTAMP_NAME_TOKENS and ts_share > SEMANTIC_BIAS_RATIO:
        return ColumnType.TIMESTAMP, ts_share
    date_share = stats.share(ValueKind.DATE)
    if tokens & DATE_NAME_TOKENS and date_share > SEMANTIC_BIAS_RATIO:
        return ColumnType.DATE, date_share
    numeric_share = stats.share(
        ValueKind.INTEGER, ValueKind.ZERO_ONE, ValueKind.FLOAT
    )
    if tokens & FLOAT_NAME_TOKENS and numeric_share >= threshold:
        return ColumnType.FLOAT, numeric_share
    return None


def name_tokens(name: str) -> list[str]:
    """Lower-case word tokens of a column name.

    Splits on non-alphanumerics and camelCase humps, so ``userId``,
    ``user_id`` and ``USER-ID`` all yield ``["user", "id"]``.
    """
    tokens: list[str] = []
    for part in _NAME_SPLIT_RE.split(name):
        if not part:
            continue
        tokens.extend(t.lower() for t in _CAMEL_RE.findall(part))
    return tokens


# ── Header detection ─────────────────────────────────────


def is_header_word(token: str) -> bool:
    normalized = token.strip().lower()
    if not normalized:
        return False
    if normalized in HEADER_WORDS:
        return True
    return any(p in HEADER_WORDS for p in _HEADER_SPLIT_RE.split(normalized) if p)


def dominant_type(values: list[str]) -> ColumnType | None:
    """Most common coarse type among non-empty cells; ties prefer String."""
    tally: Counter[ColumnType] = Counter()
    for value in values:
        coarse = coarse_type(classify_value(value))
        if coarse is not None:
            tally[coarse] += 1
    if not tally:
        return None
    best = max(tally.values())
    leaders = [t for t, n in tally.items() if n == best]
    if ColumnType.STRING in leaders:
        return ColumnType.STRING
    return sorted(leaders)[0]


def detect_header(rows: list[list[str]]) -> bool:
    """Decide whether row 0 is a header, from the sampled rows.

    1. Any row-0 token that is (or contains) a common header word: header.
    2. A row-0 token that is plain text over a column whose bulk is not
       text: header.
    3. Row 0 typed exactly like the bulk of every column: no header.
    4. Anything else (including fewer than two rows): header.
    """
    if len(rows) < 2:
        return True
    first, body = rows[0], rows[1:]
    if any(is_header_word(token) for token in first):
        return True

    uniform = True
    for idx, token in enumerate(first):
        head_type = coarse_type(classify_value(token))
        bulk = dominant_type([row[idx] for row in body if idx < len(row)])
        if head_type is None or bulk is None:
            continue
        if head_type is ColumnType.STRING and bulk is not ColumnType.STRING:
            return True
        if head_type is not bulk:
            uniform = False
    return not uniform
