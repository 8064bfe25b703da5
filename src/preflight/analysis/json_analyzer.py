"""Bounded-depth structural JSON validator.

Validates syntax over a stream of decoded chunks without building a
value tree. Only the root object's keys are materialised. Each grammar
method returns ``True`` on success; on the first violation it records
``error`` and returns ``False``, leaving the facts gathered so far
(depth reached, keys seen) intact.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from preflight.analysis.decoding import iter_text_chunks
from preflight.analysis.schemas import JsonAnalysis
from preflight.config import Settings

_WHITESPACE = " \t\n\r"
_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DIGITS = frozenset("0123456789")


def analyze_json(path: Path, settings: Settings) -> JsonAnalysis:
    """Validate a JSON file. Decoding and read errors propagate to ``analyze()``."""
    return analyze_json_chunks(
        iter_text_chunks(path, settings.chunk_size_bytes),
        settings.max_json_depth,
    )


def analyze_json_chunks(chunks: Iterable[str], max_depth: int) -> JsonAnalysis:
    scanner = JsonScanner(chunks, max_depth)
    valid = scanner.parse_document()
    return JsonAnalysis(
        is_valid=valid,
        max_depth=scanner.max_depth_seen,
        top_level_keys=sorted(scanner.keys),
        is_array=scanner.root == "array",
        error=scanner.error,
    )


class JsonScanner:
    """Recursive-descent recogniser over a chunked character stream."""

    def __init__(self, chunks: Iterable[str], max_depth: int) -> None:
        self._chunks: Iterator[str] = iter(chunks)
        self._buf = ""
        self._pos = 0
        self.offset = 0
        self.max_depth = max_depth
        self.depth = 0
        self.max_depth_seen = 0
        self.keys: set[str] = set()
        self.root: str | None = None
        self.error: str | None = None

    # ── Character stream ─────────────────────────────────

    def _peek(self) -> str:
        while self._pos >= len(self._buf):
            nxt = next(self._chunks, None)
            if nxt is None:
                return ""
            self._buf, self._pos = nxt, 0
        return self._buf[self._pos]

    def _advance(self) -> str:
        ch = self._peek()
        if ch:
            self._pos += 1
            self.offset += 1
        return ch

    def _skip_ws(self) -> None:
        while (ch := self._peek()) and ch in _WHITESPACE:
            self._advance()

    def _fail(self, message: str) -> bool:
        if self.error is None:
            self.error = f"{message} at offset {self.offset}"
        return False

    # ── Grammar ──────────────────────────────────────────

    def parse_document(self) -> bool:
        self._skip_ws()
        if not self._peek():
            return self._fail("empty document")
        if not self._value():
            return False
        self._skip_ws()
        if self._peek():
            return self._fail("unexpected trailing data")
        return True

    def _value(self) -> bool:
        ch = self._peek()
        if self.root is None:
            self.root = {"{": "object", "[": "array"}.get(ch, "scalar")
        if ch == "{":
            return self._object()
        if ch == "[":
            return self._array()
        if ch == '"':
            return self._string(capture=False) is not None
        if ch == "-" or ch in _DIGITS:
            return self._number()
        if ch == "t":
            return self._literal("true")
        if ch == "f":
            return self._literal("false")
        if ch == "n":
            return self._literal("null")
        if not ch:
            return self._fail("unexpected end of input")
        return self._fail(f"unexpected character {ch!r}")

    def _enter(self) -> bool:
        if self.depth + 1 > self.max_depth:
            return self._fail(f"maximum nesting depth {self.max_depth} exceeded")
        self.depth += 1
        self.max_depth_seen = max(self.max_depth_seen, self.depth)
        return True

    def _object(self) -> bool:
        if not self._enter():
            return False
        self._advance()  # {
        self._skip_ws()
        if self._peek() == "}":
            self._advance()
            self.depth -= 1
            return True
        while True:
            self._skip_ws()
            if self._peek() != '"':
                return self._fail("expected object key")
            key = self._string(capture=self.depth == 1)
            if key is None:
                return False
            if self.depth == 1:
                self.keys.add(key)
            self._skip_ws()
            if self._advance() != ":":
                return self._fail("expected ':'")
            self._skip_ws()
            if not self._value():
                return False
            self._skip_ws()
            ch = self._advance()
            if ch == ",":
                continue
            if ch == "}":
                self.depth -= 1
                return True
            return self._fail("expected ',' or '}'")

    def _array(self) -> bool:
        if not self._enter():
            return False
        self._advance()  # [
        self._skip_ws()
        if self._peek() == "]":
            self._advance()
            self.depth -= 1
            return True
        while True:
            self._skip_ws()
            if not self._value():
                return False
            self._skip_ws()
            ch = self._advance()
            if ch == ",":
                continue
            if ch == "]":
                self.depth -= 1
                return True
            return self._fail("expected ',' or ']'")

    def _string(self, capture: bool) -> str | None:
        """Consume a string literal; return its text when ``capture``."""
        self._advance()  # opening quote
        out: list[str] = []
        while True:
            ch = self._advance()
            if not ch:
                self._fail("unterminated string")
                return None
            if ch == '"':
                return "".join(out)
            if ch == "\\":
                esc = self._advance()
                if esc in _SIMPLE_ESCAPES:
                    if capture:
                        out.append(_SIMPLE_ESCAPES[esc])
                elif esc == "u":
                    digits = "".join(self._advance() for _ in range(4))
                    if len(digits) != 4 or not set(digits) <= _HEX_DIGITS:
                        self._fail("invalid unicode escape")
                        return None
                    if capture:
                        out.append(chr(int(digits, 16)))
                else:
                    self._fail("invalid escape sequence")
                    return None
            elif ord(ch) < 0x20:
                self._fail("control character in string")
                return None
            elif capture:
                out.append(ch)

    def _number(self) -> bool:
        if self._peek() == "-":
            self._advance()
        ch = self._peek()
        if ch == "0":
            self._advance()
        elif ch in _DIGITS and ch:
            self._digits()
        else:
            return self._fail("invalid number")
        if self._peek() == ".":
            self._advance()
            if not self._digits():
                return self._fail("invalid number fraction")
        if (ch := self._peek()) and ch in "eE":
            self._advance()
            if (sign := self._peek()) and sign in "+-":
                self._advance()
            if not self._digits():
                return self._fail("invalid number exponent")
        return True

    def _digits(self) -> bool:
        seen = False
        while (ch := self._peek()) and ch in _DIGITS:
            self._advance()
            seen = True
        return seen

    def _literal(self, word: str) -> bool:
        for expected in word:
            if self._advance() != expected:
                return self._fail(f"invalid literal, expected {word!r}")
        return True
