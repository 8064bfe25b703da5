"""Required files and directory layout."""

from __future__ import annotations

from preflight.constants import MAX_FILENAME_LENGTH, MAX_NESTING_DEPTH
from preflight.validation.names import is_license, is_metadata, is_readme
from preflight.validation.schemas import DatasetContext, Finding, Rule


def check_required_files(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    if not ctx.any_name(is_readme):
        findings.append(
            Finding.critical(
                "STR-001",
                "Missing README file",
                "Create a README.md file describing your dataset",
            )
        )
    if not ctx.any_name(is_license):
        findings.append(
            Finding.critical(
                "STR-002",
                "Missing LICENSE file",
                "Add a LICENSE file specifying usage terms and permissions",
            )
        )
    if not ctx.any_name(is_metadata):
        findings.append(
            Finding.warning(
                "STR-003",
                "Missing metadata.json file",
                "Create a metadata.json file with dataset description and provenance",
            )
        )
    return findings


def check_layout(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        if record.depth > MAX_NESTING_DEPTH:
            findings.append(
                Finding.warning(
                    "STR-004",
                    f"Deeply nested file: {record.depth} levels deep",
                    "Consider flattening directory structure for better accessibility",
                    record.path,
                )
            )
        if len(record.name) > MAX_FILENAME_LENGTH:
            findings.append(
                Finding.warning(
                    "STR-005",
                    f"Filename too long: {len(record.name)} characters",
                    f"Shorten filename to under {MAX_FILENAME_LENGTH} characters",
                    record.path,
                )
            )
    return findings


RULES = (
    Rule("required_files", check_required_files),
    Rule("layout", check_layout),
)
