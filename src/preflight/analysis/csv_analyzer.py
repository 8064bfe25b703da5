"""Single-pass CSV analysis: delimiter, header, and full-file column types."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from preflight.analysis.csv_tokenizer import CsvTokenizer, DelimiterSampler
from preflight.analysis.decoding import iter_text_chunks
from preflight.analysis.inference import ColumnStats, detect_header, infer_type
from preflight.analysis.schemas import ColumnInfo, CsvAnalysis
from preflight.config import Settings

logger = logging.getLogger(__name__)


def analyze_csv(path: Path, settings: Settings) -> CsvAnalysis:
    """Analyze a CSV file read in ``settings.chunk_size_bytes`` chunks.

    The file head is fed to one tokenizer per candidate delimiter; the
    winning tokenizer then continues through the rest of the file, so
    the content is tokenized once. Malformed quoting yields a partial
    result with ``parse_error`` set. ``UnicodeDecodeError`` (non-UTF-8
    input) and ``OSError`` propagate to ``analyze()``.
    """
    return analyze_csv_chunks(
        iter_text_chunks(path, settings.chunk_size_bytes), settings
    )


def analyze_csv_chunks(chunks: Iterable[str], settings: Settings) -> CsvAnalysis:
    """Analyze CSV text supplied as an iterable of decoded chunks."""
    stream = iter(chunks)
    sampler = DelimiterSampler(settings.delimiter_sample_rows)
    sampled_chars = 0
    for chunk in stream:
        sampler.feed(chunk)
        sampled_chars += len(chunk) - len(sampler.remainder)
        if sampler.full or sampled_chars >= settings.delimiter_sample_max_bytes:
            break
    else:
        sampler.finish()

    delimiter = sampler.choose()
    tokenizer, head_rows = sampler.take(delimiter)
    rows = _iter_rows(tokenizer, head_rows, sampler, stream)

    first = next(rows, None)
    if first is None:
        return CsvAnalysis(
            delimiter=delimiter,
            has_header=True,
            parse_error=tokenizer.error,
        )

    has_header = detect_header(head_rows[: settings.delimiter_sample_rows])
    width = len(first)
    stats = [
        ColumnStats(name=_column_name(first, idx, has_header), index=idx)
        for idx in range(width)
    ]

    row_count = 0
    ragged = 0
    data_rows: Iterator[list[str]] = rows
    if not has_header:
        data_rows = _prepend(first, rows)
    for row in data_rows:
        row_count += 1
        if len(row) != width:
            ragged += 1
        for idx in range(min(width, len(row))):
            stats[idx].add(row[idx])

    threshold = settings.type_threshold
    columns: list[ColumnInfo] = []
    for col in stats:
        numeric_elsewhere = any(
            other.suggests_numeric(threshold)
            for other in stats
            if other is not col
        )
        inferred, confidence = infer_type(col, threshold, numeric_elsewhere)
        columns.append(
            ColumnInfo(
                name=col.name,
                index=col.index,
                inferred_type=inferred,
                confidence=confidence,
                null_count=col.null_count,
                sample_values=col.samples,
            )
        )

    if tokenizer.error:
        logger.debug("event=csv_parse_error error=%s", tokenizer.error)
    return CsvAnalysis(
        delimiter=delimiter,
        has_header=has_header,
        columns=columns,
        row_count=row_count,
        ragged_row_count=ragged,
        parse_error=tokenizer.error,
    )


def _iter_rows(
    tokenizer: CsvTokenizer,
    head_rows: list[list[str]],
    sampler: DelimiterSampler,
    stream: Iterator[str],
) -> Iterator[list[str]]:
    yield from head_rows
    if sampler.finished:
        return
    if sampler.remainder:
        yield from tokenizer.feed(sampler.remainder)
    for chunk in stream:
        yield from tokenizer.feed(chunk)
    yield from tokenizer.finish()


def _prepend(first: list[str], rest: Iterator[list[str]]) -> Iterator[list[str]]:
    yield first
    yield from rest


def _column_name(first: list[str], idx: int, has_header: bool) -> str:
    if has_header:
        name = first[idx].strip()
        if name:
            return name
    return f"column_{idx + 1}"
