"""Error classification for per-file analysis failures.

Classifies exceptions by category to enable:
- Structured logging (which files failed, and why)
- ErrorAnalysis records that say what kind of failure occurred
- Data-quality findings keyed on the failure category
"""

from __future__ import annotations

from enum import StrEnum


class ErrorClass(StrEnum):
    IO = "io"  # unreadable file, permission, vanished mid-scan
    STRUCTURAL = "structural"  # malformed CSV quoting, JSON syntax, depth limit
    ENCODING = "encoding"  # bytes are not valid UTF-8
    UNKNOWN = "unknown"  # unclassified


class StructuralParseError(ValueError):
    """Malformed content detected by a structural analyzer.

    Analyzers report these as partial results rather than raising; the
    class exists so a caller holding one can classify it uniformly.
    """


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error to determine how it is reported.

    UnicodeDecodeError is checked before ValueError (it subclasses it).
    """
    if isinstance(error, UnicodeDecodeError):
        return ErrorClass.ENCODING
    if isinstance(error, StructuralParseError):
        return ErrorClass.STRUCTURAL
    if isinstance(error, OSError):
        return ErrorClass.IO
    return ErrorClass.UNKNOWN


def describe_error(error: BaseException) -> str:
    """Human-readable one-line reason for an ErrorAnalysis."""
    if isinstance(error, OSError) and error.strerror:
        return f"{error.strerror}"
    text = str(error).strip()
    return text or type(error).__name__
