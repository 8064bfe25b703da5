"""Content quality of the documentation files (not just their presence)."""

from __future__ import annotations

from typing import Any

from preflight.constants import (
    MIN_README_SUBSTANTIVE,
    MIN_SECTION_SUBSTANTIVE,
    TODO_PATTERNS,
)
from preflight.validation.names import (
    is_datacard,
    is_license,
    is_metadata,
    is_readme,
)
from preflight.validation.rules.metadata import parse_metadata
from preflight.validation.schemas import DatasetContext, Finding, Rule

_PLACEHOLDER_MARKERS = ("[todo", "todo:", "fixme", "xxx")

# (key, code, accepted keys, why it matters)
_REQUIRED_FIELDS = (
    ("title", "FAIR-F101", ("title",), "Dataset title is required for findability"),
    (
        "description",
        "FAIR-F102",
        ("description",),
        "Dataset description is required for findability",
    ),
)
_RECOMMENDED_FIELDS = (
    ("keywords", "FAIR-F103", ("keywords",), "Keywords help others discover your dataset"),
    (
        "creator",
        "FAIR-F104",
        ("creator", "author"),
        "Creator/author information aids attribution",
    ),
    (
        "license",
        "FAIR-A101",
        ("license",),
        "License information is required for accessibility",
    ),
)

# Recognised licence families, matched on lower-cased text
_LICENSE_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("MIT", ("mit license",)),
    ("MIT", ("permission is hereby granted, free of charge",)),
    ("Apache-2.0", ("apache license", "version 2.0")),
    ("BSD-3-Clause", ("bsd", "redistributions of source code")),
    ("GPL-3.0", ("gnu general public license", "version 3")),
    ("LGPL-3.0", ("gnu lesser general public license",)),
    ("CC0-1.0", ("cc0",)),
    ("CC0-1.0", ("creative commons zero",)),
    ("CC-BY-SA-4.0", ("creative commons", "attribution", "4.0", "sharealike")),
    ("CC-BY-4.0", ("creative commons", "attribution", "4.0")),
    ("Public Domain", ("public domain",)),
    ("Public Domain", ("no copyright",)),
)

_DATACARD_SECTIONS = (
    ("provenance", "FAIR-R301", "Provenance section"),
    ("methodology", "FAIR-R302", "Methodology section"),
    ("data collection", "FAIR-R303", "Data collection section"),
)


# ── Text helpers ─────────────────────────────────────────


def count_todo_lines(text: str) -> int:
    """Lines carrying a TODO/FIXME/XXX marker (one per line)."""
    return sum(
        1
        for line in text.splitlines()
        if any(p in line.upper() for p in TODO_PATTERNS)
    )


def substantive_length(text: str) -> int:
    """Letters, digits and whitespace left after dropping placeholder lines."""
    kept = [
        line
        for line in text.splitlines()
        if line.strip()
        and not any(m in line.lower() for m in _PLACEHOLDER_MARKERS)
    ]
    return sum(1 for c in "\n".join(kept) if c.isalnum() or c.isspace())


def detect_license(text: str) -> str | None:
    lower = text.lower()
    for name, needles in _LICENSE_MARKERS:
        if all(n in lower for n in needles):
            return name
    return None


def _has_value(data: dict[str, Any], keys: tuple[str, ...]) -> bool:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            stripped = value.strip()
            if stripped and not stripped.upper().startswith("[TODO"):
                return True
        elif isinstance(value, list | dict):
            if value:
                return True
        else:
            return True
    return False


def _readable_text(ctx: DatasetContext, path: str) -> str | None:
    """Loaded text of a document, or None if it was missing or unreadable."""
    doc = ctx.documents.get(path)
    return doc.text if doc is not None else None


# ── Rules ────────────────────────────────────────────────


def check_metadata_content(ctx: DatasetContext) -> list[Finding]:
    record = ctx.first_named(is_metadata)
    if record is None:
        return []
    text = _readable_text(ctx, record.path)
    if text is None:
        return []
    findings: list[Finding] = []
    data = parse_metadata(text)
    if data is not None:
        for key, code, keys, why in _REQUIRED_FIELDS:
            if not _has_value(data, keys):
                findings.append(
                    Finding.critical(
                        code,
                        f"{why}: '{key}' field missing or empty",
                        f"Add a meaningful '{key}' field to metadata.json",
                        record.path,
                    )
                )
        for key, code, keys, why in _RECOMMENDED_FIELDS:
            if not _has_value(data, keys):
                findings.append(
                    Finding.warning(
                        code,
                        f"{why}: '{key}' field missing or empty",
                        f"Add a '{key}' field to metadata.json",
                        record.path,
                    )
                )
    todos = count_todo_lines(text)
    if todos:
        findings.append(
            Finding.warning(
                "CONTENT-002",
                f"metadata.json contains {todos} TODO marker(s) that need completion",
                "Complete all TODO sections in metadata.json before submission.",
                record.path,
            )
        )
    return findings


def check_readme_content(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        if not is_readme(record.name):
            continue
        text = _readable_text(ctx, record.path)
        if text is None:
            continue
        if substantive_length(text) < MIN_README_SUBSTANTIVE:
            findings.append(
                Finding.warning(
                    "FAIR-F201",
                    "README lacks substantive content "
                    f"(< {MIN_README_SUBSTANTIVE} characters of real content)",
                    "Add meaningful documentation to help others understand "
                    "your dataset.",
                    record.path,
                )
            )
        headings = sum(1 for line in text.splitlines() if line.startswith("#"))
        if headings < 2:
            findings.append(
                Finding.info(
                    "FAIR-F202",
                    f"README has only {headings} section header(s); "
                    "consider adding more structure",
                    "Add sections like Description, Data Files, Usage, "
                    "Citation, License.",
                    record.path,
                )
            )
        todos = count_todo_lines(text)
        if todos:
            findings.append(
                Finding.warning(
                    "CONTENT-011",
                    f"README contains {todos} TODO marker(s) that need completion",
                    "Complete all TODO sections in README before submission.",
                    record.path,
                )
            )
        lower = text.lower()
        if not any(w in lower for w in ("citation", "cite", "reference")):
            findings.append(
                Finding.info(
                    "FAIR-R201",
                    "README does not include citation information",
                    "Add a Citation section explaining how to cite this dataset.",
                    record.path,
                )
            )
    return findings


def check_license_content(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        if not is_license(record.name):
            continue
        text = _readable_text(ctx, record.path)
        if text is None:
            continue
        if detect_license(text) is None:
            findings.append(
                Finding.warning(
                    "FAIR-A201",
                    "LICENSE file does not contain recognized license text",
                    "Use a standard license (MIT, Apache-2.0, CC-BY-4.0) "
                    "for clarity.",
                    record.path,
                )
            )
        if count_todo_lines(text):
            findings.append(
                Finding.warning(
                    "CONTENT-021",
                    "LICENSE contains TODO markers - license may be incomplete",
                    "Complete all placeholders in LICENSE file.",
                    record.path,
                )
            )
    return findings


def check_datacard_content(ctx: DatasetContext) -> list[Finding]:
    findings: list[Finding] = []
    for record in ctx.records:
        if not is_datacard(record.name):
            continue
        text = _readable_text(ctx, record.path)
        if text is None:
            continue
        todos = count_todo_lines(text)
        if todos:
            findings.append(
                Finding.warning(
                    "CONTENT-030",
                    f"{record.name} contains {todos} TODO marker(s) - "
                    "provenance documentation incomplete",
                    f"Complete all TODO sections in {record.name} for full "
                    "provenance.",
                    record.path,
                )
            )
        lower = text.lower()
        for section, code, label in _DATACARD_SECTIONS:
            pos = lower.find(section)
            if pos < 0:
                continue
            body: list[str] = []
            for line in lower[pos:].splitlines()[1:]:
                if line.startswith("#"):
                    break
                body.append(line)
            if substantive_length("\n".join(body)) < MIN_SECTION_SUBSTANTIVE:
                findings.append(
                    Finding.info(
                        code,
                        f"{label} exists but lacks substantive content",
                        f"Add detailed information to the {label}.",
                        record.path,
                    )
                )
    return findings


RULES = (
    Rule("metadata_content", check_metadata_content),
    Rule("readme_content", check_readme_content),
    Rule("license_content", check_license_content),
    Rule("datacard_content", check_datacard_content),
)
