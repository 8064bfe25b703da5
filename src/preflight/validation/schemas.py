"""Models shared by the validation rules."""

from __future__ import annotations

from typing import TypeAlias
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from preflight.analysis.schemas import Analysis
from preflight.constants import FAIR_PREFIXES, Severity
from preflight.scanner.schemas import FileRecord


class Finding(BaseModel):
    """A single compliance issue.

    The ``code`` prefix is what scoring keys on: ``FAIR-F``/``FAIR-A``/
    ``FAIR-I``/``FAIR-R`` findings also reduce that dimension's sub-score.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity
    code: str
    message: str
    suggestion: str = ""
    file_path: str | None = None

    @classmethod
    def critical(
        cls, code: str, message: str, suggestion: str = "", file_path: str | None = None
    ) -> Finding:
        return cls(
            severity=Severity.CRITICAL,
            code=code,
            message=message,
            suggestion=suggestion,
            file_path=file_path,
        )

    @classmethod
    def warning(
        cls, code: str, message: str, suggestion: str = "", file_path: str | None = None
    ) -> Finding:
        return cls(
            severity=Severity.WARNING,
            code=code,
            message=message,
            suggestion=suggestion,
            file_path=file_path,
        )

    @classmethod
    def info(
        cls, code: str, message: str, suggestion: str = "", file_path: str | None = None
    ) -> Finding:
        return cls(
            severity=Severity.INFO,
            code=code,
            message=message,
            suggestion=suggestion,
            file_path=file_path,
        )

    @property
    def dimension(self) -> str | None:
        """FAIR dimension this finding counts against, if any."""
        for name, prefix in FAIR_PREFIXES.items():
            if self.code.startswith(prefix):
                return name
        return None

    def sort_key(self) -> tuple[str, bool, str, str]:
        """Code, then path (dataset-level findings first), then message."""
        return (
            self.code,
            self.file_path is not None,
            self.file_path or "",
            self.message,
        )


class Document(BaseModel):
    """Text of a documentation file, loaded once per run."""

    model_config = ConfigDict(frozen=True)

    path: str
    text: str | None = None
    error: str | None = None  # set when the file could not be read


class Manifest(BaseModel):
    """Parsed ``sha256sum``-style manifest: relative path -> hex digest."""

    model_config = ConfigDict(frozen=True)

    path: str
    entries: dict[str, str] = Field(default_factory=lambda: dict[str, str]())
    error: str | None = None


@dataclass(frozen=True)
class DatasetContext:
    """Read-only input shared by every rule."""

    records: tuple[FileRecord, ...]
    analyses: tuple[Analysis, ...]
    documents: Mapping[str, Document] = field(
        default_factory=lambda: MappingProxyType({})
    )
    manifest: Manifest | None = None
    large_file_bytes: int = 1_073_741_824

    def __post_init__(self) -> None:
        if len(self.records) != len(self.analyses):
            raise ValueError(
                f"records ({len(self.records)}) and analyses "
                f"({len(self.analyses)}) must be index-aligned"
            )

    def pairs(self) -> Iterator[tuple[FileRecord, Analysis]]:
        return zip(self.records, self.analyses, strict=True)

    def any_name(self, predicate: Callable[[str], bool]) -> bool:
        return any(predicate(r.name) for r in self.records)

    def first_named(self, predicate: Callable[[str], bool]) -> FileRecord | None:
        return next((r for r in self.records if predicate(r.name)), None)


RuleCheck: TypeAlias = Callable[[DatasetContext], list[Finding]]


@dataclass(frozen=True)
class Rule:
    """A named, independent check over the whole dataset."""

    name: str
    check: RuleCheck
