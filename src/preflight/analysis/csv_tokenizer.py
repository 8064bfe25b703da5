"""Streaming RFC 4180 tokenizer driven by an explicit state machine.

Transition table (``d`` = delimiter, ``q`` = ``"``, ``nl`` = ``\\n``,
``cr`` = ``\\r``; "emit" closes the current field, "row" closes the row):

==========================  ========  =====================================
state                       input     action -> next state
==========================  ========  =====================================
FIELD_START                 q         -> IN_QUOTED_FIELD
FIELD_START                 d         emit "" -> FIELD_START
FIELD_START                 cr / nl   row (blank line skipped) -> ROW_END /
                                      FIELD_START
FIELD_START                 other     append -> IN_UNQUOTED_FIELD
IN_UNQUOTED_FIELD           d         emit -> FIELD_START
IN_UNQUOTED_FIELD           cr / nl   emit, row -> ROW_END / FIELD_START
IN_UNQUOTED_FIELD           other     append (stray quote kept literal)
IN_QUOTED_FIELD             q         -> QUOTE_IN_QUOTED_FIELD
IN_QUOTED_FIELD             other     append (d, cr, nl are literal)
QUOTE_IN_QUOTED_FIELD       q         append q -> IN_QUOTED_FIELD
QUOTE_IN_QUOTED_FIELD       d         emit -> FIELD_START
QUOTE_IN_QUOTED_FIELD       cr / nl   emit, row -> ROW_END / FIELD_START
QUOTE_IN_QUOTED_FIELD       other     append -> IN_UNQUOTED_FIELD
ROW_END                     nl        -> FIELD_START (CRLF pair)
ROW_END                     other     re-dispatch as FIELD_START
==========================  ========  =====================================

The state is carried across ``feed`` calls, so a quoted field (or the
two halves of an escaped quote) may straddle a chunk boundary.
"""

from __future__ import annotations

from enum import StrEnum

from preflight.constants import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER

QUOTE = '"'


class TokenizerState(StrEnum):
    FIELD_START = "field_start"
    IN_UNQUOTED_FIELD = "in_unquoted_field"
    IN_QUOTED_FIELD = "in_quoted_field"
    QUOTE_IN_QUOTED_FIELD = "quote_in_quoted_field"
    ROW_END = "row_end"


class CsvTokenizer:
    """Incremental CSV tokenizer; feed text, collect completed rows."""

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        if len(delimiter) != 1 or delimiter in (QUOTE, "\r", "\n"):
            raise ValueError(f"invalid delimiter: {delimiter!r}")
        self.delimiter = delimiter
        self.state = TokenizerState.FIELD_START
        self.error: str | None = None
        self.rows_emitted = 0
        self._field: list[str] = []
        self._row: list[str] = []
        self._finished = False

    def feed(self, text: str) -> list[list[str]]:
        """Consume ``text`` and return the rows it completed."""
        if self._finished:
            raise RuntimeError("tokenizer already finished")
        rows: list[list[str]] = []
        for ch in text:
            self._step(ch, rows)
        return rows

    def finish(self) -> list[list[str]]:
        """Signal end of input and flush the last row, if any.

        An input ending inside a quoted field records ``error`` and the
        partial row is dropped.
        """
        if self._finished:
            return []
        self._finished = True
        rows: list[list[str]] = []
        match self.state:
            case TokenizerState.IN_QUOTED_FIELD:
                self.error = (
                    f"unterminated quoted field in record {self.rows_emitted + 1}"
                )
                self._field.clear()
                self._row.clear()
            case TokenizerState.IN_UNQUOTED_FIELD | TokenizerState.QUOTE_IN_QUOTED_FIELD:
                self._end_field()
                self._end_row(rows)
            case TokenizerState.FIELD_START:
                # "a,b," at EOF still owes its trailing empty field
                if self._row:
                    self._end_field()
                    self._end_row(rows)
            case TokenizerState.ROW_END:
                pass
        self.state = TokenizerState.ROW_END
        return rows

    def _step(self, ch: str, rows: list[list[str]]) -> None:
        state = self.state
        if state is TokenizerState.ROW_END:
            if ch == "\n":
                self.state = TokenizerState.FIELD_START
                return
            state = TokenizerState.FIELD_START

        if state is TokenizerState.FIELD_START:
            if ch == QUOTE:
                self.state = TokenizerState.IN_QUOTED_FIELD
            elif ch == self.delimiter:
                self._end_field()
                self.state = TokenizerState.FIELD_START
            elif ch in "\r\n":
                if self._row:
                    self._end_field()
                    self._end_row(rows)
                self.state = self._after_newline(ch)
            else:
                self._field.append(ch)
                self.state = TokenizerState.IN_UNQUOTED_FIELD

        elif state is TokenizerState.IN_UNQUOTED_FIELD:
            if ch == self.delimiter:
                self._end_field()
                self.state = TokenizerState.FIELD_START
            elif ch in "\r\n":
                self._end_field()
                self._end_row(rows)
                self.state = self._after_newline(ch)
            else:
                self._field.append(ch)

        elif state is TokenizerState.IN_QUOTED_FIELD:
            if ch == QUOTE:
                self.state = TokenizerState.QUOTE_IN_QUOTED_FIELD
            else:
                self._field.append(ch)

        else:  # QUOTE_IN_QUOTED_FIELD
            if ch == QUOTE:
                self._field.append(QUOTE)
                self.state = TokenizerState.IN_QUOTED_FIELD
            elif ch == self.delimiter:
                self._end_field()
                self.state = TokenizerState.FIELD_START
            elif ch in "\r\n":
                self._end_field()
                self._end_row(rows)
                self.state = self._after_newline(ch)
            else:
                self._field.append(ch)
                self.state = TokenizerState.IN_UNQUOTED_FIELD

    @staticmethod
    def _after_newline(ch: str) -> TokenizerState:
        return TokenizerState.ROW_END if ch == "\r" else TokenizerState.FIELD_START

    def _end_field(self) -> None:
        self._row.append("".join(self._field))
        self._field.clear()

    def _end_row(self, rows: list[list[str]]) -> None:
        rows.append(self._row)
        self._row = []
        self.rows_emitted += 1


def tokenize(text: str, delimiter: str = DEFAULT_DELIMITER) -> list[list[str]]:
    """Tokenize a complete in-memory document."""
    tokenizer = CsvTokenizer(delimiter)
    rows = tokenizer.feed(text)
    rows.extend(tokenizer.finish())
    return rows


# ── Delimiter detection ──────────────────────────────────

_SAMPLE_SLICE_CHARS = 4096


class DelimiterSampler:
    """Runs one tokenizer per candidate delimiter over the file head.

    Record boundaries do not depend on the delimiter (newlines outside
    quotes), so every candidate sees the same rows; the number of
    separators outside quotes in a row is ``len(row) - 1``. Once a
    delimiter is chosen its tokenizer, already positioned after the
    sample, carries on with the rest of the file.
    """

    def __init__(self, max_rows: int) -> None:
        self.max_rows = max_rows
        self._tokenizers = {d: CsvTokenizer(d) for d in CANDIDATE_DELIMITERS}
        self._rows: dict[str, list[list[str]]] = {
            d: [] for d in CANDIDATE_DELIMITERS
        }
        self.remainder = ""
        self.finished = False

    @property
    def full(self) -> bool:
        return len(self._rows[DEFAULT_DELIMITER]) >= self.max_rows

    def feed(self, text: str) -> None:
        """Feed ``text`` until enough rows are sampled; keep the rest."""
        pos = 0
        while pos < len(text) and not self.full:
            piece = text[pos:pos + _SAMPLE_SLICE_CHARS]
            pos += len(piece)
            for d, tokenizer in self._tokenizers.items():
                self._rows[d].extend(tokenizer.feed(piece))
        self.remainder = text[pos:]

    def finish(self) -> None:
        """The whole input fit in the sample; flush every tokenizer."""
        for d, tokenizer in self._tokenizers.items():
            self._rows[d].extend(tokenizer.finish())
        self.finished = True

    def separator_counts(self) -> dict[str, list[int]]:
        return {
            d: [len(row) - 1 for row in rows[: self.max_rows]]
            for d, rows in self._rows.items()
        }

    def choose(self) -> str:
        return choose_delimiter(self.separator_counts())

    def take(self, delimiter: str) -> tuple[CsvTokenizer, list[list[str]]]:
        """Hand over the chosen tokenizer and every row it has emitted."""
        return self._tokenizers[delimiter], self._rows[delimiter]


def choose_delimiter(counts: dict[str, list[int]]) -> str:
    """Pick the delimiter whose per-row count is constant and non-zero.

    Highest constant count wins; no consistent candidate, an empty
    sample, or a tie for the highest count falls back to comma.
    """
    accepted: dict[str, int] = {}
    for delimiter in CANDIDATE_DELIMITERS:
        per_row = counts.get(delimiter, [])
        if not per_row:
            continue
        first = per_row[0]
        if first > 0 and all(c == first for c in per_row):
            accepted[delimiter] = first
    if not accepted:
        return DEFAULT_DELIMITER
    best = max(accepted.values())
    winners = [d for d, c in accepted.items() if c == best]
    if len(winners) > 1:
        return DEFAULT_DELIMITER
    return winners[0]


def detect_delimiter(sample: str, max_rows: int = 10) -> str:
    """Detect the delimiter of an in-memory sample."""
    sampler = DelimiterSampler(max_rows)
    sampler.feed(sample)
    if not sampler.full:
        sampler.finish()
    return sampler.choose()
