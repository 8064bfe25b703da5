"""Parse ``sha256sum``-style integrity manifests."""

from __future__ import annotations

import re

from preflight.constants import MANIFEST_FILENAME
from preflight.validation.schemas import Manifest

_HEX_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def parse_manifest(text: str, path: str = MANIFEST_FILENAME) -> Manifest:
    """Parse ``<sha256>  <relative path>`` lines.

    Blank lines and ``#`` comments are ignored; a single space between
    digest and path is tolerated. The first malformed line stops parsing
    and is reported in ``Manifest.error``.
    """
    entries: dict[str, str] = {}
    for line_num, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "  " in line:
            digest, _, name = line.partition("  ")
        else:
            digest, sep, name = line.partition(" ")
            if not sep:
                return Manifest(
                    path=path,
                    error=f"Invalid format on line {line_num}: expected 'hash  path'",
                )
        if not _HEX_RE.match(digest):
            return Manifest(
                path=path,
                error=(
                    f"Invalid hash on line {line_num}: expected 64 hex characters"
                ),
            )
        entries[name] = digest.lower()
    return Manifest(path=path, entries=entries)
