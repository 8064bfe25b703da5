"""JSON report: machine-readable envelope for CI consumers."""

from __future__ import annotations

import json
from typing import Any

from preflight.scoring.scorer import ComplianceScore
from preflight.services.preflight_service import PreflightResult
from preflight.validation.schemas import Finding


def render_json_report(result: PreflightResult) -> str:
    """Serialize a run. Field names are a stable contract."""
    return json.dumps(report_dict(result), indent=2, ensure_ascii=False)


def report_dict(result: PreflightResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "dataset_path": str(result.root),
        "scan_timestamp": result.scanned_at.isoformat(),
        "score": _score_to_dict(result.score),
        "files": {
            "count": len(result.records),
            "total_size_bytes": result.total_size_bytes,
        },
        "validation_results": [_finding_to_dict(f) for f in result.findings],
        "exit_code": result.exit_code,
    }
    return payload


def _score_to_dict(score: ComplianceScore | None) -> dict[str, int] | None:
    if score is None:
        return None
    return {
        "total": score.total,
        "findable": score.findable,
        "accessible": score.accessible,
        "interoperable": score.interoperable,
        "reusable": score.reusable,
        "critical_count": score.critical_count,
        "warning_count": score.warning_count,
        "info_count": score.info_count,
    }


def _finding_to_dict(finding: Finding) -> dict[str, Any]:
    return {
        "severity": finding.severity.upper(),
        "code": finding.code,
        "message": finding.message,
        "suggestion": finding.suggestion,
        "file_path": finding.file_path,
    }
