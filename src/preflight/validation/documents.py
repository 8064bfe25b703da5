"""Load documentation text once so content rules stay pure."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from preflight.config import Settings
from preflight.constants import MANIFEST_FILENAME
from preflight.scanner.schemas import FileRecord
from preflight.validation.manifest import parse_manifest
from preflight.validation.names import is_document
from preflight.validation.schemas import Document, Manifest

logger = logging.getLogger(__name__)


def load_documents(
    records: list[FileRecord], settings: Settings | None = None
) -> Mapping[str, Document]:
    """Read README/LICENSE/metadata.json/DATACARD/CITATION files.

    Files larger than ``max_document_bytes`` or that cannot be opened
    are returned with ``error`` set and no text. Undecodable bytes are
    replaced rather than rejected.
    """
    cfg = settings if settings is not None else Settings()
    docs: dict[str, Document] = {}
    for record in records:
        if not is_document(record.name):
            continue
        docs[record.path] = _read_document(record, cfg.max_document_bytes)
    return MappingProxyType(docs)


def _read_document(record: FileRecord, limit: int) -> Document:
    if record.size_bytes > limit:
        return Document(
            path=record.path,
            error=f"document exceeds {limit} bytes",
        )
    try:
        with open(record.full_path, encoding="utf-8", errors="replace") as f:
            text = f.read(limit)
    except OSError as exc:
        logger.warning(
            "event=document_unreadable path=%s error=%s", record.path, exc
        )
        return Document(path=record.path, error=str(exc))
    return Document(path=record.path, text=text)


def load_manifest(records: list[FileRecord]) -> Manifest | None:
    """Parse the root MANIFEST.txt, if the dataset has one."""
    record = next((r for r in records if r.path == MANIFEST_FILENAME), None)
    if record is None:
        return None
    try:
        with open(record.full_path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        return Manifest(
            path=record.path, error=f"Failed to open manifest: {exc}"
        )
    return parse_manifest(text, record.path)
