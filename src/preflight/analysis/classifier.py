"""Content classifier: decide a file's structural kind from a byte prefix."""

from __future__ import annotations

from pathlib import Path

from preflight.config import BINARY_SIGNATURES, EXTENSION_KINDS
from preflight.constants import TEXT_CONTROL_BYTES, FileKind

DEFAULT_PREFIX_BYTES = 512
DEFAULT_CONTROL_RATIO = 0.3


def classify(
    prefix: bytes,
    extension: str,
    control_ratio: float = DEFAULT_CONTROL_RATIO,
) -> FileKind:
    """Classify a file from (at most) its first few hundred bytes.

    A NUL byte, or a share of non-printable control bytes above
    ``control_ratio``, means Binary regardless of extension. Otherwise
    the extension picks CSV/JSON where recognised, else Text. The result
    is advisory: analyzers still tolerate malformed content.
    """
    if is_binary_prefix(prefix, control_ratio):
        return FileKind.BINARY
    return EXTENSION_KINDS.get(extension.lower().lstrip("."), FileKind.TEXT)


def is_binary_prefix(
    prefix: bytes, control_ratio: float = DEFAULT_CONTROL_RATIO
) -> bool:
    if not prefix:
        return False
    if b"\x00" in prefix:
        return True
    control = sum(1 for b in prefix if _is_control(b))
    return control / len(prefix) > control_ratio


def _is_control(byte: int) -> bool:
    # Bytes >= 0x80 are left to the decoder (UTF-8 multibyte sequences)
    if byte == 0x7F:
        return True
    return byte < 0x20 and byte not in TEXT_CONTROL_BYTES


def read_prefix(path: Path, size: int = DEFAULT_PREFIX_BYTES) -> bytes:
    """Read up to ``size`` leading bytes. Raises OSError if unreadable."""
    with open(path, "rb") as f:
        return f.read(size)


def sniff_binary_format(prefix: bytes) -> str:
    """Name a binary format from its magic number, or ``unknown``."""
    for magic, label in BINARY_SIGNATURES:
        if prefix.startswith(magic):
            return label
    return "unknown"
