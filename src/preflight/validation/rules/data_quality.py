"""Data-quality checks over file records and their analyses."""

from __future__ import annotations

from preflight.analysis.schemas import (
    BinaryAnalysis,
    CsvAnalysis,
    ErrorAnalysis,
    JsonAnalysis,
    TextAnalysis,
)
from preflight.constants import MIN_DOC_RATIO
from preflight.validation.names import is_documentation
from preflight.validation.schemas import DatasetContext, Finding, Rule

_GIB = 1024 * 1024 * 1024


def check_documentation_ratio(ctx: DatasetContext) -> list[Finding]:
    if not ctx.records:
        return []
    docs = sum(1 for r in ctx.records if is_documentation(r.name))
    total = len(ctx.records)
    ratio = docs / total
    if ratio >= MIN_DOC_RATIO:
        return []
    return [
        Finding.warning(
            "QUALITY-001",
            f"Low documentation ratio: {ratio * 100:.1f}% ({docs} of {total} files)",
            "Add more documentation files (README, guides, data dictionaries)",
        )
    ]


def check_file_sizes(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        if record.size_bytes == 0:
            findings.append(
                Finding.warning(
                    "QUALITY-002",
                    "File is empty",
                    "Remove empty file or add content",
                    record.path,
                )
            )
        elif record.size_bytes > ctx.large_file_bytes:
            findings.append(
                Finding.info(
                    "QUALITY-003",
                    f"Large file: {record.size_bytes / _GIB:.2f} GB",
                    "Consider splitting large files for better accessibility "
                    "and processing",
                    record.path,
                )
            )
    return findings


def check_analyses(ctx: DatasetContext) -> list[Finding]:
    """Turn per-file analysis problems into findings."""
    findings: list[Finding] = []
    for record, analysis in ctx.pairs():
        match analysis:
            case TextAnalysis(encoding_ok=False):
                findings.append(
                    Finding.warning(
                        "QUALITY-004",
                        "Text file contains control characters",
                        "Re-save the file as clean UTF-8 text",
                        record.path,
                    )
                )
            case BinaryAnalysis(reclassified=True):
                findings.append(
                    Finding.warning(
                        "QUALITY-004",
                        f"File looks like {record.kind} but is not valid UTF-8; "
                        "treated as binary",
                        "Re-encode the file as UTF-8",
                        record.path,
                    )
                )
            case CsvAnalysis():
                if analysis.parse_error:
                    findings.append(
                        Finding.warning(
                            "QUALITY-005",
                            f"CSV could not be fully parsed: {analysis.parse_error}",
                            "Check the file for unbalanced quotes",
                            record.path,
                        )
                    )
                if analysis.ragged_row_count:
                    findings.append(
                        Finding.warning(
                            "QUALITY-006",
                            f"{analysis.ragged_row_count} of {analysis.row_count} "
                            "rows have a different number of fields than the "
                            "first row",
                            "Make every row have the same number of columns",
                            record.path,
                        )
                    )
            case ErrorAnalysis():
                findings.append(
                    Finding.warning(
                        "QUALITY-007",
                        f"File could not be analyzed: {analysis.reason}",
                        "Check the file exists and is readable",
                        record.path,
                    )
                )
            case JsonAnalysis(is_valid=False):
                findings.append(
                    Finding.warning(
                        "QUALITY-008",
                        f"Invalid JSON: {analysis.error or 'syntax error'}",
                        "Validate the file with a JSON linter",
                        record.path,
                    )
                )
            case _:
                pass
    return findings


RULES = (
    Rule("documentation_ratio", check_documentation_ratio),
    Rule("file_sizes", check_file_sizes),
    Rule("analysis_problems", check_analyses),
)
