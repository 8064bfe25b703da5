"""Plain-text terminal report (no ANSI colours)."""

from __future__ import annotations

from collections import Counter

from preflight.constants import Severity
from preflight.services.preflight_service import PreflightResult
from preflight.validation.schemas import Finding

RULE = "=" * 64

# Issues shown per severity unless verbose
_DISPLAY_LIMITS = {
    Severity.CRITICAL: 10,
    Severity.WARNING: 10,
    Severity.INFO: 5,
}


def render_terminal_report(result: PreflightResult, verbose: bool = False) -> str:
    lines: list[str] = [
        RULE,
        "FAIR PREFLIGHT REPORT",
        RULE,
        "",
        f"Dataset: {result.root}",
        f"Scanned: {result.scanned_at.isoformat(timespec='seconds')}",
        "",
    ]
    lines += _summary(result)
    lines += _score(result)
    lines += _issues(result.findings, verbose)
    if verbose:
        lines += _stages(result)
    lines += [f"Outcome: {result.outcome.upper()} (exit {result.exit_code})", RULE]
    return "\n".join(lines)


def format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def _summary(result: PreflightResult) -> list[str]:
    kinds = Counter(r.kind.value for r in result.records)
    ordered = sorted(kinds.items(), key=lambda kv: (-kv[1], kv[0]))
    types = ", ".join(f"{n} {kind}" for kind, n in ordered) or "none"
    return [
        "SUMMARY",
        "-------",
        f"Files scanned: {len(result.records)}",
        f"Total size: {format_size(result.total_size_bytes)}",
        f"File types: {types}",
        "",
    ]


def _score(result: PreflightResult) -> list[str]:
    score = result.score
    if score is None:
        return ["COMPLIANCE SCORE: unavailable", ""]
    return [
        f"COMPLIANCE SCORE: {score.total}/100",
        "-" * 47,
        f"Findable:       {score.findable}/25",
        f"Accessible:     {score.accessible}/25",
        f"Interoperable:  {score.interoperable}/25",
        f"Reusable:       {score.reusable}/25",
        "",
    ]


def _issues(findings: list[Finding], verbose: bool) -> list[str]:
    lines = ["ISSUES FOUND", "------------"]
    if not findings:
        return [*lines, "No issues found.", ""]
    for severity in (Severity.CRITICAL, Severity.WARNING, Severity.INFO):
        group = [f for f in findings if f.severity is severity]
        if not group:
            continue
        limit = len(group) if verbose else _DISPLAY_LIMITS[severity]
        lines.append(f"{severity.upper()} ({len(group)}):")
        for finding in group[:limit]:
            where = f" ({finding.file_path})" if finding.file_path else ""
            lines.append(f"  [{finding.code}] {finding.message}{where}")
            if finding.suggestion:
                lines.append(f"    -> {finding.suggestion}")
        if len(group) > limit:
            lines.append(f"  ... and {len(group) - limit} more")
        lines.append("")
    return lines


def _stages(result: PreflightResult) -> list[str]:
    lines = ["STAGES", "------"]
    for stage in result.stages:
        lines.append(
            f"  [{stage.outcome}] {stage.name} ({stage.duration_ms:.0f}ms)"
        )
        if stage.error:
            lines.append(f"    Error: {stage.error}")
    lines.append(f"  total ({result.total_duration_ms:.0f}ms)")
    lines.append("")
    return lines
