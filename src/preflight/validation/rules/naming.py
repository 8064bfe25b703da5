"""File naming conventions."""

from __future__ import annotations

from collections import defaultdict
from pathlib import PurePosixPath

from preflight.constants import (
    DISCOURAGED_NAME_TOKENS,
    MIXED_CASE_MIN_FILES,
    MIXED_CASE_RATIO,
)
from preflight.validation.names import is_data_file, is_descriptive, stem_words
from preflight.validation.schemas import DatasetContext, Finding, Rule

# Conventionally upper-case names excluded from the mixed-case tally
_UPPERCASE_CONVENTION = ("README", "LICENSE", "LICENCE", "CONTRIBUTING", "CHANGELOG")


def _is_valid_name_char(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c in "-_."


def check_characters(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        name = record.name
        if " " in name:
            findings.append(
                Finding.warning(
                    "NAME-001",
                    f"Filename contains spaces: {name}",
                    "Rename to use underscores or hyphens: "
                    f"{name.replace(' ', '_')}",
                    record.path,
                )
            )
        invalid = "".join(c for c in name if not _is_valid_name_char(c))
        if invalid:
            findings.append(
                Finding.warning(
                    "NAME-002",
                    f"Filename contains special characters: {invalid}",
                    "Use only letters, numbers, hyphens, underscores, and dots",
                    record.path,
                )
            )
    return findings


def check_mixed_case(ctx: DatasetContext) -> list[Finding]:
    total = 0
    mixed = 0
    for record in ctx.records:
        name = record.name
        if name.upper().startswith(_UPPERCASE_CONVENTION):
            continue
        total += 1
        if any(c.isupper() for c in PurePosixPath(name).stem):
            mixed += 1
    if total > MIXED_CASE_MIN_FILES and mixed / total > MIXED_CASE_RATIO:
        return [
            Finding.info(
                "NAME-003",
                f"Mixed case filenames detected ({mixed} of {total} files)",
                "Consider using consistent lowercase naming for better compatibility",
            )
        ]
    return []


def check_duplicates(ctx: DatasetContext) -> list[Finding]:
    by_name: dict[str, list[str]] = defaultdict(list)
    for record in ctx.records:
        by_name[record.name.lower()].append(record.path)
    findings: list[Finding] = []
    for name in sorted(by_name):
        paths = by_name[name]
        if len(set(paths)) > 1:
            findings.append(
                Finding.warning(
                    "NAME-004",
                    "Duplicate filename (case-insensitive): "
                    f"{name} appears {len(paths)} times",
                    "Rename files to have unique names across all directories",
                )
            )
    return findings


def check_descriptive(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        name = record.name
        flagged = sorted(set(stem_words(name)) & DISCOURAGED_NAME_TOKENS)
        if flagged:
            findings.append(
                Finding.info(
                    "NAME-005",
                    f"Filename suggests a working copy ({', '.join(flagged)}): {name}",
                    "Publish a single canonical version and drop "
                    "copy/final/backup markers from names",
                    record.path,
                )
            )
        if is_data_file(name) and not is_descriptive(name):
            findings.append(
                Finding.info(
                    "FAIR-F301",
                    f"Data file '{name}' has a non-descriptive name",
                    "Use descriptive filenames that indicate the content "
                    "(e.g., 'temperature_readings.csv').",
                    record.path,
                )
            )
    return findings


RULES = (
    Rule("name_characters", check_characters),
    Rule("name_case", check_mixed_case),
    Rule("name_duplicates", check_duplicates),
    Rule("name_descriptive", check_descriptive),
)
