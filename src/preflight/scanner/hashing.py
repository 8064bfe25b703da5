"""Streaming SHA-256 digests for integrity manifests."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from preflight.scanner.schemas import FileRecord

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65_536


def sha256_file(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Hex SHA-256 of a file, read in fixed-size chunks."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()


def hash_records(
    records: list[FileRecord], chunk_size: int = DEFAULT_CHUNK_SIZE
) -> list[FileRecord]:
    """Return copies of ``records`` carrying their ``sha256``.

    Unreadable files keep ``sha256=None``; the analysis stage reports
    them.
    """
    hashed: list[FileRecord] = []
    for record in records:
        try:
            digest = sha256_file(record.full_path, chunk_size)
        except OSError as exc:
            logger.warning(
                "event=hash_failed path=%s error=%s", record.path, exc
            )
            hashed.append(record)
            continue
        hashed.append(record.model_copy(update={"sha256": digest}))
    return hashed
