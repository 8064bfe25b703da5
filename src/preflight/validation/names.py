"""File-name predicates shared by rules and document loading."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from preflight.constants import (
    DATA_EXTENSIONS,
    DOCUMENTATION_EXTENSIONS,
    DOCUMENTATION_PREFIXES,
    GENERIC_FILE_STEMS,
    METADATA_FILENAME,
)

_WORD_SPLIT_RE = re.compile(r"[^0-9a-z]+")


def is_readme(name: str) -> bool:
    return name.upper().startswith("README")


def is_license(name: str) -> bool:
    upper = name.upper()
    return upper.startswith("LICENSE") or upper.startswith("LICENCE")


def is_metadata(name: str) -> bool:
    return name == METADATA_FILENAME


def is_datacard(name: str) -> bool:
    return name.upper().startswith("DATACARD")


def is_citation(name: str) -> bool:
    return "CITATION" in name.upper()


def is_schema(name: str) -> bool:
    return name.endswith("schema.json") or name.endswith(".schema")


def is_document(name: str) -> bool:
    """Files whose text the content rules read."""
    return (
        is_readme(name)
        or is_license(name)
        or is_metadata(name)
        or is_datacard(name)
        or is_citation(name)
    )


def is_documentation(name: str) -> bool:
    """Counts toward the documentation ratio."""
    if name.upper().startswith(DOCUMENTATION_PREFIXES):
        return True
    return extension_of(name) in DOCUMENTATION_EXTENSIONS


def is_data_file(name: str) -> bool:
    return extension_of(name) in DATA_EXTENSIONS


def is_descriptive(name: str) -> bool:
    """False for generic, numeric-only, or very short file stems."""
    stem = PurePosixPath(name).stem.lower()
    if stem in GENERIC_FILE_STEMS:
        return False
    if stem.isascii() and stem.isdigit():
        return False
    return len(stem) >= 3


def extension_of(name: str) -> str:
    return PurePosixPath(name).suffix.lower().lstrip(".")


def stem_words(name: str) -> list[str]:
    stem = PurePosixPath(name).stem.lower()
    return [w for w in _WORD_SPLIT_RE.split(stem) if w]
