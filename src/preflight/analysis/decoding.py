"""Chunked strict UTF-8 decoding shared by the text-like analyzers."""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from pathlib import Path

_BOM = "\ufeff"


def iter_text_chunks(path: Path, chunk_size: int) -> Iterator[str]:
    """Yield decoded text from ``path`` in chunks of at most ``chunk_size`` bytes.

    Decoding is strict: invalid UTF-8 raises ``UnicodeDecodeError``,
    which propagates through the analyzers to ``analyze()``, the one
    place it becomes ``BinaryAnalysis(reclassified=True)``. A leading
    byte-order mark is dropped. Multibyte sequences split across chunk
    boundaries are carried by the incremental decoder.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
    first = True
    with open(path, "rb") as f:
        while True:
            raw = f.read(chunk_size)
            final = not raw
            text = decoder.decode(raw, final=final)
            if first and text:
                if text.startswith(_BOM):
                    text = text[1:]
                first = False
            if text:
                yield text
            if final:
                return
