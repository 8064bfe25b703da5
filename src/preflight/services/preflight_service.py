"""Pipeline orchestration: scan, analyze, validate, score."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType
from typing import TypeVar

from preflight.analysis.analyzer import analyze
from preflight.analysis.schemas import Analysis
from preflight.config import Settings
from preflight.constants import (
    EXIT_CODES,
    MANIFEST_FILENAME,
    Outcome,
    StageOutcome,
)
from preflight.logger import ScanLogger
from preflight.scanner.directory import scan_directory
from preflight.scanner.hashing import hash_records
from preflight.scanner.schemas import FileRecord
from preflight.scoring.scorer import ComplianceScore, classify_outcome, score
from preflight.validation.documents import load_documents, load_manifest
from preflight.validation.engine import validate
from preflight.validation.schemas import Document, Finding, Manifest

logger = logging.getLogger(__name__)

RUN_ID_HEX_LENGTH = 12


@dataclass
class StageStatus:
    """Status of a pipeline stage."""

    name: str
    outcome: StageOutcome
    duration_ms: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not StageOutcome.FAILED


@dataclass
class PreflightResult:
    """Full result of a preflight run."""

    run_id: str
    root: Path
    scanned_at: datetime
    records: list[FileRecord] = field(default_factory=lambda: list[FileRecord]())
    analyses: list[Analysis] = field(default_factory=lambda: list[Analysis]())
    findings: list[Finding] = field(default_factory=lambda: list[Finding]())
    score: ComplianceScore | None = None
    stages: list[StageStatus] = field(default_factory=lambda: list[StageStatus]())
    total_duration_ms: float = 0.0

    @property
    def outcome(self) -> Outcome:
        if self.score is None:
            return Outcome.FAILURE
        return classify_outcome(self.score)

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.outcome]

    @property
    def total_size_bytes(self) -> int:
        return sum(r.size_bytes for r in self.records)


def run_preflight(
    root: str | Path,
    settings: Settings | None = None,
) -> PreflightResult:
    """Run the full preflight pipeline over ``root``, sequentially.

    Stages:
      1. scan       enumerate + classify files (ScanError propagates)
      2. hash       SHA-256 per file (skipped unless enabled or a
                    MANIFEST.txt is present)
      3. analyze    per-file structural analysis, failures isolated
      4. documents  load documentation text and the manifest
      5. validate   run every rule
      6. score      reduce findings to a ComplianceScore
    """
    cfg = settings if settings is not None else Settings()
    root_path = Path(root)
    run_id = uuid.uuid4().hex[:RUN_ID_HEX_LENGTH]
    scan_log = ScanLogger(cfg.log_dir, cfg.log_level) if cfg.log_dir else None
    result = PreflightResult(
        run_id=run_id, root=root_path, scanned_at=datetime.now(UTC)
    )
    t0 = time.monotonic()
    logger.info("event=preflight_start run_id=%s root=%s", run_id, root_path)

    try:
        # 1. Scan
        t_scan = time.monotonic()
        records = scan_directory(root_path, cfg)
        _record(result, scan_log, StageStatus(
            name="scan",
            outcome=StageOutcome.COMPLETED,
            duration_ms=_elapsed(t_scan),
        ), items=len(records))

        # 2. Hash
        has_manifest = any(r.path == MANIFEST_FILENAME for r in records)
        if cfg.hash_files or has_manifest:
            hashed, status = _run_stage_sync(
                "hash",
                lambda: hash_records(records, cfg.chunk_size_bytes),
            )
            if hashed is not None:
                records = hashed
        else:
            status = StageStatus(name="hash", outcome=StageOutcome.SKIPPED)
        _record(result, scan_log, status, items=len(records))
        result.records = records

        # 3. Analyze
        t_analyze = time.monotonic()
        result.analyses = _analyze_records(records, cfg, run_id, scan_log)
        _record(result, scan_log, StageStatus(
            name="analyze",
            outcome=StageOutcome.COMPLETED,
            duration_ms=_elapsed(t_analyze),
        ), items=len(result.analyses))

        # 4. Documents + manifest
        loaded, status = _run_stage_sync(
            "documents",
            lambda: (load_documents(records, cfg), load_manifest(records)),
        )
        documents: Mapping[str, Document] = MappingProxyType({})
        manifest: Manifest | None = None
        if loaded is not None:
            documents, manifest = loaded
        _record(result, scan_log, status, items=len(documents))

        # 5. Validate
        findings, status = _run_stage_sync(
            "validate",
            lambda: validate(
                records,
                result.analyses,
                documents=documents,
                manifest=manifest,
                settings=cfg,
            ),
        )
        _record(result, scan_log, status, items=len(records))
        result.findings = findings or []

        # 6. Score
        scored, status = _run_stage_sync(
            "score", lambda: score(result.findings)
        )
        _record(result, scan_log, status, items=len(result.findings))
        result.score = scored
    finally:
        if scan_log is not None:
            scan_log.close()

    result.total_duration_ms = _elapsed(t0)
    logger.info(
        "event=preflight_done run_id=%s files=%d findings=%d total=%s "
        "duration_ms=%.0f",
        run_id,
        len(result.records),
        len(result.findings),
        result.score.total if result.score else None,
        result.total_duration_ms,
    )
    return result


def _analyze_records(
    records: list[FileRecord],
    cfg: Settings,
    run_id: str,
    scan_log: ScanLogger | None,
) -> list[Analysis]:
    analyses: list[Analysis] = []
    for record in records:
        t_file = time.monotonic()
        analysis = analyze(record, cfg)
        analyses.append(analysis)
        if scan_log is not None:
            scan_log.log_file(run_id, record, analysis, _elapsed(t_file))
    return analyses


def _record(
    result: PreflightResult,
    scan_log: ScanLogger | None,
    status: StageStatus,
    items: int | None = None,
) -> None:
    result.stages.append(status)
    if scan_log is not None:
        scan_log.log_stage(
            result.run_id,
            status.name,
            status.outcome,
            status.duration_ms,
            items=items,
            error=status.error,
        )


# -- Generic stage runner --

T = TypeVar("T")


def _run_stage_sync(
    name: str,
    fn: Callable[[], T],
) -> tuple[T | None, StageStatus]:
    """Run a sync stage with error capture."""
    t0 = time.monotonic()
    try:
        out = fn()
        return out, StageStatus(
            name=name,
            outcome=StageOutcome.COMPLETED,
            duration_ms=_elapsed(t0),
        )
    except Exception as exc:
        logger.exception("event=stage_failed stage=%s", name)
        return None, StageStatus(
            name=name,
            outcome=StageOutcome.FAILED,
            duration_ms=_elapsed(t0),
            error=str(exc),
        )


def _elapsed(t0: float) -> float:
    return (time.monotonic() - t0) * 1000
