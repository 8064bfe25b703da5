"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON reports,
log lines, finding codes) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class FileKind(StrEnum):
    """Structural kind assigned by the content classifier."""

    CSV = "csv"
    JSON = "json"
    TEXT = "text"
    BINARY = "binary"


class ColumnType(StrEnum):
    """Inferred type of a CSV column."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    DATE = "date"
    STRING = "string"


class Severity(StrEnum):
    """Severity of a compliance finding."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Outcome(StrEnum):
    """Overall run classification used for the process exit status."""

    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"


class StageOutcome(StrEnum):
    """Outcome of an individual pipeline stage execution."""

    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


# Severity rank for display ordering (most severe first)
SEVERITY_RANK: dict[str, int] = {
    Severity.CRITICAL: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}

EXIT_CODES: dict[str, int] = {
    Outcome.SUCCESS: 0,
    Outcome.WARNING: 1,
    Outcome.FAILURE: 2,
}

EXIT_USAGE_ERROR = 3

# ── FAIR Dimensions ──────────────────────────────────────

# Finding code prefix → ComplianceScore sub-score field
FAIR_PREFIXES: dict[str, str] = {
    "findable": "FAIR-F",
    "accessible": "FAIR-A",
    "interoperable": "FAIR-I",
    "reusable": "FAIR-R",
}

# ── CSV Analysis ─────────────────────────────────────────

CANDIDATE_DELIMITERS = (",", "\t", ";", "|")
DEFAULT_DELIMITER = ","
MAX_SAMPLE_VALUES = 5

HEADER_WORDS = frozenset({
    "id",
    "name",
    "date",
    "time",
    "timestamp",
    "value",
    "type",
    "count",
    "description",
    "label",
    "category",
    "status",
    "year",
    "unit",
    "units",
})

BOOLEAN_LITERALS = frozenset({
    "true",
    "false",
    "yes",
    "no",
    "y",
    "n",
    "t",
    "f",
})

ZERO_ONE_LITERALS = frozenset({"0", "1"})

# Column-name keyword families for semantic type overrides.
FLOAT_NAME_TOKENS = frozenset({
    "temp",
    "temperature",
    "celsius",
    "fahrenheit",
    "kelvin",
    "lat",
    "latitude",
    "lon",
    "lng",
    "longitude",
    "x",
    "y",
    "z",
})
STRING_NAME_TOKENS = frozenset({
    "id",
    "identifier",
    "uuid",
    "guid",
    "key",
})
TIMESTAMP_NAME_TOKENS = frozenset({"timestamp", "datetime", "time", "ts"})
DATE_NAME_TOKENS = frozenset({"date", "day"})
SEMANTIC_BIAS_RATIO = 0.5

# ── Content Classifier ───────────────────────────────────

# Control bytes that still count as printable text
TEXT_CONTROL_BYTES = frozenset({0x08, 0x09, 0x0A, 0x0C, 0x0D, 0x1B})

# ── Validation Rules ─────────────────────────────────────

MAX_NESTING_DEPTH = 10
MAX_FILENAME_LENGTH = 255
MIN_README_LENGTH = 100
MIN_README_SUBSTANTIVE = 200
MIN_SECTION_SUBSTANTIVE = 50
MIN_DOC_RATIO = 0.1
NON_STANDARD_FORMAT_RATIO = 0.1
MIXED_CASE_RATIO = 0.3
MIXED_CASE_MIN_FILES = 5

DOCUMENTATION_PREFIXES = ("README", "LICENSE", "LICENCE", "CONTRIBUTING", "CHANGELOG")
DOCUMENTATION_EXTENSIONS = frozenset({"md", "markdown", "rst", "txt"})
DATA_EXTENSIONS = frozenset({"csv", "json", "txt", "dat", "tsv"})

METADATA_FILENAME = "metadata.json"
MANIFEST_FILENAME = "MANIFEST.txt"

DISCOURAGED_NAME_TOKENS = frozenset({
    "copy",
    "final",
    "old",
    "backup",
    "bak",
    "draft",
})

GENERIC_FILE_STEMS = frozenset({
    "data",
    "data1",
    "data2",
    "data3",
    "file",
    "file1",
    "file2",
    "test",
    "test1",
    "test2",
    "temp",
    "tmp",
    "new",
    "new1",
    "untitled",
    "document",
    "copy",
})

TODO_PATTERNS = ("[TODO]", "[TODO:", "TODO:", "FIXME:", "FIXME", "XXX")

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
SHA256_HEX_LENGTH = 64
