"""Per-file analysis dispatch with failure isolation."""

from __future__ import annotations

from typing import TypeAlias
import logging
from collections.abc import Callable
from pathlib import Path

from preflight.analysis.binary import analyze_binary
from preflight.analysis.csv_analyzer import analyze_csv
from preflight.analysis.errors import ErrorClass, classify_error, describe_error
from preflight.analysis.json_analyzer import analyze_json
from preflight.analysis.schemas import Analysis, BinaryAnalysis, ErrorAnalysis
from preflight.analysis.text import analyze_text
from preflight.config import Settings
from preflight.constants import FileKind
from preflight.scanner.schemas import FileRecord

logger = logging.getLogger(__name__)

Analyzer: TypeAlias = Callable[[Path, Settings], Analysis]

_ANALYZERS: dict[FileKind, Analyzer] = {
    FileKind.CSV: analyze_csv,
    FileKind.JSON: analyze_json,
    FileKind.TEXT: analyze_text,
    FileKind.BINARY: analyze_binary,
}


def analyze(record: FileRecord, settings: Settings | None = None) -> Analysis:
    """Analyze one file according to its classified kind.

    Never raises for a per-file problem:

    * invalid UTF-8 in a CSV/JSON/text file reclassifies it as binary
    * an unreadable file becomes ``ErrorAnalysis`` (error class ``io``)
    * anything else unexpected becomes ``ErrorAnalysis`` and is logged
    """
    cfg = settings if settings is not None else Settings()
    analyzer = _ANALYZERS[record.kind]
    try:
        return analyzer(record.full_path, cfg)
    except UnicodeDecodeError:
        # Sole point where an encoding failure becomes a reclassification
        logger.info(
            "event=reclassified_binary path=%s kind=%s",
            record.path,
            record.kind,
        )
        return BinaryAnalysis(byte_size=record.size_bytes, reclassified=True)
    except OSError as exc:
        logger.warning(
            "event=file_unreadable path=%s error=%s", record.path, exc
        )
        return ErrorAnalysis(
            reason=describe_error(exc), error_class=ErrorClass.IO
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "event=analysis_failed path=%s", record.path, exc_info=True
        )
        return ErrorAnalysis(
            reason=describe_error(exc), error_class=classify_error(exc)
        )


def analyze_all(
    records: list[FileRecord], settings: Settings | None = None
) -> list[Analysis]:
    """Analyze records sequentially; output is index-aligned with input."""
    cfg = settings if settings is not None else Settings()
    return [analyze(record, cfg) for record in records]
