"""Compare current file digests against MANIFEST.txt."""

from __future__ import annotations

from preflight.constants import MANIFEST_FILENAME
from preflight.validation.schemas import DatasetContext, Finding, Rule

# Documentation that is typically (re)generated after the manifest
_GENERATED_FILES = frozenset({"README.md", "metadata.json", "DATACARD.md"})


def _is_manifest(path: str) -> bool:
    return path == MANIFEST_FILENAME or path.endswith("/" + MANIFEST_FILENAME)


def _exempt_from_new(path: str) -> bool:
    return (
        _is_manifest(path)
        or path in _GENERATED_FILES
        or path.endswith(".schema.json")
    )


def check_integrity(ctx: DatasetContext) -> list[Finding]:
    manifest = ctx.manifest
    if manifest is None:
        return []
    if manifest.error is not None:
        return [
            Finding.warning(
                "INTEGRITY-004",
                f"Could not parse manifest: {manifest.error}",
                "Ensure MANIFEST.txt follows the format: 'sha256_hash  path'",
                manifest.path,
            )
        ]

    current = {r.path: r for r in ctx.records}
    findings: list[Finding] = []
    for path in sorted(manifest.entries):
        if _is_manifest(path):
            continue
        expected = manifest.entries[path]
        record = current.pop(path, None)
        if record is None or record.sha256 is None:
            findings.append(
                Finding.critical(
                    "INTEGRITY-002",
                    f"File listed in manifest is missing: {path}",
                    "Restore the missing file or regenerate the manifest if "
                    "removal was intentional.",
                    path,
                )
            )
            continue
        if record.sha256.lower() != expected:
            findings.append(
                Finding.critical(
                    "INTEGRITY-001",
                    f"File has been modified since manifest was created: {path}",
                    f"Expected hash: {expected}, actual hash: {record.sha256}. "
                    "Regenerate manifest if changes are intentional.",
                    path,
                )
            )

    for path in sorted(current):
        if _exempt_from_new(path):
            continue
        findings.append(
            Finding.warning(
                "INTEGRITY-003",
                f"File not in manifest (added after manifest was created): {path}",
                "Regenerate the manifest to include new files.",
                path,
            )
        )
    return findings


RULES = (Rule("integrity", check_integrity),)
