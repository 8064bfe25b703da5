"""Write missing documentation templates into a dataset directory.

Existing files are never overwritten: each target is reported as
created or skipped. The manifest is rendered last from the records
scanned before generation, so the new templates stay out of it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath

from preflight.analysis.schemas import Analysis, CsvAnalysis
from preflight.constants import MANIFEST_FILENAME, METADATA_FILENAME
from preflight.generator.datacard import render_datacard
from preflight.generator.manifest import render_manifest
from preflight.generator.metadata import render_metadata
from preflight.generator.readme import render_readme
from preflight.generator.schema import render_csv_schema
from preflight.generator.schemas import DatasetSummary, GeneratedFile
from preflight.scanner.hashing import DEFAULT_CHUNK_SIZE
from preflight.scanner.schemas import FileRecord

logger = logging.getLogger(__name__)

_SUMMARY_TEMPLATES: list[tuple[str, Callable[[DatasetSummary], str]]] = [
    ("README.md", render_readme),
    (METADATA_FILENAME, render_metadata),
    ("DATACARD.md", render_datacard),
]


def generate_documentation(
    records: list[FileRecord],
    analyses: list[Analysis],
    output_dir: Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    generated_at: datetime | None = None,
) -> list[GeneratedFile]:
    """Write README, metadata, data card, CSV schemas and manifest.

    ``analyses`` is parallel to ``records``. Raises ``OSError`` when a
    target cannot be written.
    """
    summary = DatasetSummary.from_records(
        records, generated_at or datetime.now(UTC)
    )
    output_dir.mkdir(parents=True, exist_ok=True)

    generated = [
        _write(output_dir / name, partial(render, summary))
        for name, render in _SUMMARY_TEMPLATES
    ]

    for record, analysis in zip(records, analyses, strict=True):
        if not isinstance(analysis, CsvAnalysis) or not analysis.columns:
            continue
        parent = PurePosixPath(record.path).parent
        target = output_dir / parent / f"{record.stem}.schema.json"
        generated.append(
            _write(target, partial(render_csv_schema, analysis, record.name))
        )

    generated.append(
        _write(
            output_dir / MANIFEST_FILENAME,
            partial(render_manifest, records, chunk_size),
        )
    )
    return generated


def _write(target: Path, render: Callable[[], str]) -> GeneratedFile:
    if target.exists():
        logger.info("event=generate_skip path=%s reason=exists", target)
        return GeneratedFile(path=target, created=False)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render(), encoding="utf-8")
    logger.info("event=generate_write path=%s", target)
    return GeneratedFile(path=target, created=True)
