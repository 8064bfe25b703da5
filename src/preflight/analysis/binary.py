"""Binary files: size plus a format sniffed from magic bytes."""

from __future__ import annotations

from pathlib import Path

from preflight.analysis.classifier import read_prefix, sniff_binary_format
from preflight.analysis.schemas import BinaryAnalysis
from preflight.config import Settings


def analyze_binary(path: Path, settings: Settings) -> BinaryAnalysis:
    return BinaryAnalysis(
        byte_size=path.stat().st_size,
        format=sniff_binary_format(
            read_prefix(path, settings.classifier_prefix_bytes)
        ),
    )
