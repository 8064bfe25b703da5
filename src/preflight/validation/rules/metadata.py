"""README and metadata.json presence-level metadata checks."""

from __future__ import annotations

import json
from typing import Any

from preflight.constants import MIN_README_LENGTH
from preflight.validation.names import is_metadata, is_readme
from preflight.validation.schemas import DatasetContext, Finding, Rule

# (code, label, accepted keys, suggestion)
_REQUIRED_KEYS: tuple[tuple[str, str, tuple[str, ...], str], ...] = (
    ("META-005", "title", ("title",), "Add 'title' field to metadata.json"),
    (
        "META-006",
        "description",
        ("description",),
        "Add 'description' field to metadata.json",
    ),
    (
        "META-007",
        "creator",
        ("creator", "author"),
        "Add 'creator' or 'author' field to metadata.json",
    ),
    ("META-008", "date", ("date", "created"), "Add 'date' field to metadata.json"),
    ("META-009", "license", ("license",), "Add 'license' field to metadata.json"),
)


def parse_metadata(text: str) -> dict[str, Any] | None:
    """Parse metadata.json text; None unless it is a JSON object."""
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def check_readme(ctx: DatasetContext) -> list[Finding]:
    record = ctx.first_named(is_readme)
    if record is None:
        return []
    doc = ctx.documents.get(record.path)
    if doc is None or doc.text is None:
        return [
            Finding.warning(
                "META-002",
                "Cannot read README file",
                "Ensure README file is readable and contains valid text",
                record.path,
            )
        ]
    length = len(doc.text.strip())
    if length < MIN_README_LENGTH:
        return [
            Finding.warning(
                "META-001",
                f"README is too short ({length} characters)",
                f"Expand README to at least {MIN_README_LENGTH} characters "
                "with meaningful description",
                record.path,
            )
        ]
    return []


def check_metadata_file(ctx: DatasetContext) -> list[Finding]:
    record = ctx.first_named(is_metadata)
    if record is None:
        return []
    doc = ctx.documents.get(record.path)
    if doc is None or doc.text is None:
        return [
            Finding.critical(
                "META-003",
                "Cannot read metadata.json file",
                "Ensure metadata.json file is readable",
                record.path,
            )
        ]
    data = parse_metadata(doc.text)
    if data is None:
        return [
            Finding.critical(
                "META-004",
                "metadata.json is not valid JSON",
                "Ensure metadata.json contains valid JSON object",
                record.path,
            )
        ]
    findings: list[Finding] = []
    for code, label, keys, suggestion in _REQUIRED_KEYS:
        if not any(key in data for key in keys):
            findings.append(
                Finding.warning(
                    code, f"Missing {label} field", suggestion, record.path
                )
            )
    return findings


RULES = (
    Rule("readme_metadata", check_readme),
    Rule("metadata_file", check_metadata_file),
)
