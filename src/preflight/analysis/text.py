"""Plain-text analysis: line count and control-character check."""

from __future__ import annotations

import re
from pathlib import Path

from preflight.analysis.decoding import iter_text_chunks
from preflight.analysis.schemas import TextAnalysis
from preflight.config import Settings

# C0 controls other than tab/LF/CR/FF, plus DEL
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0e-\x1f\x7f]")


def analyze_text(path: Path, settings: Settings) -> TextAnalysis:
    """Count lines in a UTF-8 text file, streaming.

    A final line without a trailing newline still counts. Non-UTF-8
    input propagates ``UnicodeDecodeError`` to ``analyze()``.
    """
    newlines = 0
    encoding_ok = True
    last = ""
    for chunk in iter_text_chunks(path, settings.chunk_size_bytes):
        newlines += chunk.count("\n")
        if encoding_ok and _CONTROL_RE.search(chunk):
            encoding_ok = False
        last = chunk[-1]
    line_count = newlines + (1 if last and last != "\n" else 0)
    return TextAnalysis(
        line_count=line_count,
        encoding_ok=encoding_ok,
        byte_size=path.stat().st_size,
    )
