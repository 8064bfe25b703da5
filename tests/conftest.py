"""Shared test fixtures: on-disk datasets, in-memory records, settings."""

from __future__ import annotations

import os

# Keep tests hermetic: no PREFLIGHT_* overrides from the developer's shell.
for _key in [k for k in os.environ if k.startswith("PREFLIGHT_")]:
    del os.environ[_key]

from collections.abc import Callable
from pathlib import Path, PurePosixPath
from types import MappingProxyType

import pytest

from preflight.analysis.classifier import classify
from preflight.analysis.schemas import Analysis, TextAnalysis
from preflight.config import EXTENSION_KINDS, Settings
from preflight.constants import FileKind
from preflight.scanner.schemas import FileRecord
from preflight.validation.schemas import DatasetContext, Document, Manifest

LICENSE_MIT = """MIT License

Copyright (c) 2024 Example Lab

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files.
"""

README_GOOD = """# Ocean Temperature Readings

Hourly sea surface temperature measurements collected by moored buoys in
the North Atlantic between 2019 and 2023, quality controlled and gap filled.

## Data Files

- `temperature_readings.csv`: one row per buoy per hour, with station id,
  timestamp, latitude, longitude and temperature in degrees Celsius.

## Citation

Please cite this dataset using the DOI listed in metadata.json.
"""

METADATA_GOOD = """{
  "title": "Ocean Temperature Readings",
  "description": "Hourly sea surface temperatures from moored buoys.",
  "creator": "Example Lab",
  "keywords": ["ocean", "temperature"],
  "date": "2024-01-15",
  "license": "MIT"
}
"""

CSV_GOOD = """station_id,timestamp,lat,lon,temp
001,2023-01-01T00:00:00Z,42.5,-30.1,12
002,2023-01-01T01:00:00Z,42.6,-30.2,12.4
003,2023-01-01T02:00:00Z,42.7,-30.3,12.9
"""


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any .env in the working dir."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def small_chunk_settings() -> Settings:
    """Tiny chunks so quoted fields straddle chunk boundaries."""
    return Settings(_env_file=None, chunk_size_bytes=3)  # type: ignore[call-arg]


@pytest.fixture
def make_record(tmp_path: Path) -> Callable[..., FileRecord]:
    """Write ``content`` under tmp_path and return its FileRecord."""

    def _make(
        rel: str,
        content: str | bytes = "",
        kind: str | None = None,
    ) -> FileRecord:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        data = content.encode("utf-8") if isinstance(content, str) else content
        path.write_bytes(data)
        extension = path.suffix.lower().lstrip(".")
        return FileRecord(
            path=rel,
            full_path=path,
            size_bytes=len(data),
            extension=extension,
            kind=kind or classify(data[:512], extension),
        )

    return _make


@pytest.fixture
def fair_dataset(tmp_path: Path) -> Path:
    """A small dataset that passes every rule (score 100)."""
    root = tmp_path / "dataset"
    root.mkdir()
    (root / "README.md").write_text(README_GOOD)
    (root / "LICENSE").write_text(LICENSE_MIT)
    (root / "metadata.json").write_text(METADATA_GOOD)
    (root / "temperature_readings.csv").write_text(CSV_GOOD)
    (root / "temperature_readings.schema.json").write_text('{"fields": []}\n')
    return root


@pytest.fixture
def fake_record() -> Callable[..., FileRecord]:
    """A FileRecord that only exists in memory (rules never open files)."""

    def _make(
        path: str,
        size_bytes: int = 100,
        kind: FileKind | None = None,
        sha256: str | None = None,
    ) -> FileRecord:
        extension = PurePosixPath(path).suffix.lower().lstrip(".")
        return FileRecord(
            path=path,
            full_path=Path("/nonexistent") / path,
            size_bytes=size_bytes,
            extension=extension,
            kind=kind or EXTENSION_KINDS.get(extension, FileKind.TEXT),
            sha256=sha256,
        )

    return _make


@pytest.fixture
def make_context(
    fake_record: Callable[..., FileRecord],
) -> Callable[..., DatasetContext]:
    """Build a DatasetContext from paths or records.

    ``analyses`` defaults to a clean TextAnalysis per file; ``documents``
    maps path -> text (None marks an unreadable document).
    """

    def _make(
        files: list[str | FileRecord],
        analyses: list[Analysis] | None = None,
        documents: dict[str, str | None] | None = None,
        manifest: Manifest | None = None,
        large_file_bytes: int = 1_073_741_824,
    ) -> DatasetContext:
        records = tuple(
            f if isinstance(f, FileRecord) else fake_record(f) for f in files
        )
        docs = {
            path: Document(path=path, text=text)
            if text is not None
            else Document(path=path, error="unreadable")
            for path, text in (documents or {}).items()
        }
        return DatasetContext(
            records=records,
            analyses=tuple(analyses or [TextAnalysis() for _ in records]),
            documents=MappingProxyType(docs),
            manifest=manifest,
            large_file_bytes=large_file_bytes,
        )

    return _make
