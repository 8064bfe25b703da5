"""Render ``MANIFEST.txt`` in ``sha256sum`` format."""

from __future__ import annotations

import logging

from preflight.constants import MANIFEST_FILENAME
from preflight.scanner.hashing import DEFAULT_CHUNK_SIZE, sha256_file
from preflight.scanner.schemas import FileRecord

logger = logging.getLogger(__name__)


def render_manifest(
    records: list[FileRecord], chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    """One ``<hex digest>  <relative path>`` line per file, sorted by path.

    Records scanned without hashing are digested here. The root manifest
    never lists itself, and files that cannot be read are left out.
    """
    lines: list[str] = []
    for record in sorted(records, key=lambda r: r.path):
        if record.path == MANIFEST_FILENAME:
            continue
        digest = record.sha256
        if digest is None:
            try:
                digest = sha256_file(record.full_path, chunk_size)
            except OSError as exc:
                logger.warning(
                    "event=manifest_skip path=%s error=%s", record.path, exc
                )
                continue
        lines.append(f"{digest}  {record.path}\n")
    return "".join(lines)
