"""Structured JSON-lines scan log: one record per analyzed file and stage."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from preflight.analysis.schemas import Analysis, BinaryAnalysis, ErrorAnalysis
from preflight.constants import ERROR_TRUNCATION_CHARS
from preflight.logging_config import LOG_DATEFMT, LOG_FORMAT
from preflight.scanner.schemas import FileRecord

__all__ = ["ScanLogger", "LOG_FORMAT", "LOG_DATEFMT"]


class ScanLogger:
    """Writes ``<log_dir>/preflight.log``, every line tagged with the run_id.

    Record types:

    * ``file``  one per analyzed file (kind, size, digest, analysis result)
    * ``error`` a file whose analysis failed, with its error class
    * ``stage`` one per pipeline stage (outcome, items, timing)
    """

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger("preflight.scan")
        self._logger.setLevel(getattr(logging, level.upper()))
        self._logger.propagate = False

        if not self._logger.handlers:
            handler = logging.FileHandler(log_dir / "preflight.log")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def log_file(
        self,
        run_id: str,
        record: FileRecord,
        analysis: Analysis,
        duration_ms: float,
    ) -> None:
        fields: dict[str, Any] = {
            "path": record.path,
            "kind": record.kind,
            "size_bytes": record.size_bytes,
            "sha256": record.sha256,
            "analysis": analysis.kind,
            "duration_ms": duration_ms,
        }
        if isinstance(analysis, BinaryAnalysis):
            fields["reclassified"] = analysis.reclassified
        self._emit(logging.INFO, "file", run_id, fields)
        if isinstance(analysis, ErrorAnalysis):
            self._emit(
                logging.ERROR,
                "error",
                run_id,
                {
                    "path": record.path,
                    "error_class": analysis.error_class,
                    "error": analysis.reason[:ERROR_TRUNCATION_CHARS],
                },
            )

    def log_stage(
        self,
        run_id: str,
        stage: str,
        outcome: str,
        duration_ms: float,
        items: int | None = None,
        error: str | None = None,
    ) -> None:
        """``items`` counts the inputs the stage consumed."""
        self._emit(
            logging.ERROR if error else logging.INFO,
            "stage",
            run_id,
            {
                "stage": stage,
                "outcome": outcome,
                "items": items,
                "duration_ms": duration_ms,
                "error": error[:ERROR_TRUNCATION_CHARS] if error else None,
            },
        )

    def close(self) -> None:
        """Detach and close file handlers (tests reuse the logger name)."""
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    def _emit(
        self, level: int, record_type: str, run_id: str, fields: dict[str, Any]
    ) -> None:
        self._logger.log(
            level,
            json.dumps({
                "type": record_type,
                "timestamp": datetime.now(UTC).isoformat(),
                "run_id": run_id,
                **fields,
            }),
        )
