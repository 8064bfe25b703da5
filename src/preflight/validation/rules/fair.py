"""One rule group per FAIR dimension."""

from __future__ import annotations

from preflight.analysis.schemas import Analysis, BinaryAnalysis
from preflight.constants import NON_STANDARD_FORMAT_RATIO, FileKind
from preflight.scanner.schemas import FileRecord
from preflight.validation.names import (
    is_citation,
    is_datacard,
    is_license,
    is_metadata,
    is_readme,
    is_schema,
)
from preflight.validation.schemas import DatasetContext, Finding, Rule

# Binary formats that are themselves open scientific standards
_STANDARD_BINARY_FORMATS = frozenset({"hdf5", "netcdf"})


def _is_non_standard(record: FileRecord, analysis: Analysis) -> bool:
    if isinstance(analysis, BinaryAnalysis):
        return analysis.format not in _STANDARD_BINARY_FORMATS
    return record.kind is FileKind.BINARY


def check_findable(ctx: DatasetContext) -> list[Finding]:
    if ctx.any_name(is_metadata):
        return []
    return [
        Finding.warning(
            "FAIR-F001",
            "No metadata.json for findability",
            "Create metadata.json with title, description, keywords, "
            "and identifiers",
        )
    ]


def check_accessible(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    if not ctx.any_name(is_license):
        findings.append(
            Finding.critical(
                "FAIR-A001",
                "No LICENSE file for accessibility",
                "Add LICENSE file specifying usage rights and permissions",
            )
        )
    non_standard = sum(
        1 for record, analysis in ctx.pairs() if _is_non_standard(record, analysis)
    )
    if ctx.records and non_standard / len(ctx.records) > NON_STANDARD_FORMAT_RATIO:
        findings.append(
            Finding.info(
                "FAIR-A002",
                f"{non_standard} files use non-standard or unknown formats",
                "Consider converting to standard formats (CSV, JSON, HDF5, NetCDF)",
            )
        )
    return findings


def check_interoperable(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    has_csv = any(r.kind is FileKind.CSV for r in ctx.records)
    if has_csv and not ctx.any_name(is_schema):
        findings.append(
            Finding.info(
                "FAIR-I001",
                "No schema file for CSV data",
                "Create schema.json file(s) describing data structure and types",
            )
        )
    if not ctx.any_name(is_readme):
        findings.append(
            Finding.critical(
                "FAIR-I002",
                "No README for interoperability",
                "Create README documenting dataset structure and variables",
            )
        )
    return findings


def check_reusable(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    if not ctx.any_name(is_readme):
        findings.append(
            Finding.critical(
                "FAIR-R001",
                "No README for reusability",
                "Create README with usage instructions and examples",
            )
        )
    if not ctx.any_name(lambda n: is_metadata(n) or is_datacard(n)):
        findings.append(
            Finding.warning(
                "FAIR-R002",
                "No provenance information",
                "Create metadata.json or DATACARD.md documenting data origin "
                "and processing",
            )
        )
    if not ctx.any_name(lambda n: is_citation(n) or is_metadata(n)):
        findings.append(
            Finding.info(
                "FAIR-R003",
                "No citation information",
                "Add citation information to README or create CITATION file",
            )
        )
    return findings


RULES = (
    Rule("fair_findable", check_findable),
    Rule("fair_accessible", check_accessible),
    Rule("fair_interoperable", check_interoperable),
    Rule("fair_reusable", check_reusable),
)
