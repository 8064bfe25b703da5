"""Run every rule over a dataset and order the findings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from preflight.analysis.schemas import Analysis
from preflight.config import Settings
from preflight.scanner.schemas import FileRecord
from preflight.validation.rules import DEFAULT_RULES
from preflight.validation.schemas import (
    DatasetContext,
    Document,
    Finding,
    Manifest,
    Rule,
)

logger = logging.getLogger(__name__)


def validate(
    records: Sequence[FileRecord],
    analyses: Sequence[Analysis],
    *,
    documents: Mapping[str, Document] | None = None,
    manifest: Manifest | None = None,
    settings: Settings | None = None,
    rules: Iterable[Rule] = DEFAULT_RULES,
) -> list[Finding]:
    """Concatenate the output of every rule, sorted by code then path.

    ``analyses`` must be index-aligned with ``records``. Rules share no
    state; one that raises is logged and contributes nothing.
    """
    cfg = settings if settings is not None else Settings()
    ctx = DatasetContext(
        records=tuple(records),
        analyses=tuple(analyses),
        documents=MappingProxyType(dict(documents or {})),
        manifest=manifest,
        large_file_bytes=cfg.large_file_bytes,
    )
    findings: list[Finding] = []
    for rule in rules:
        try:
            findings.extend(rule.check(ctx))
        except Exception:  # noqa: BLE001
            logger.warning("event=rule_failed rule=%s", rule.name, exc_info=True)
    findings.sort(key=Finding.sort_key)
    return findings
