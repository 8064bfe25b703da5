"""Pydantic models for per-file analysis output.

``Analysis`` is a closed union discriminated on ``kind``; consumers
pattern-match on the concrete class rather than checking attributes.
"""

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from preflight.constants import ColumnType


class ColumnInfo(BaseModel):
    """Inferred facts about one CSV column."""

    model_config = ConfigDict(frozen=True)

    name: str
    index: int
    inferred_type: ColumnType = ColumnType.STRING
    confidence: float = 0.0  # exact fraction over every data row
    null_count: int = 0
    sample_values: list[str] = Field(default_factory=lambda: list[str]())


class CsvAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["csv"] = "csv"
    delimiter: str = ","
    has_header: bool = True
    columns: list[ColumnInfo] = Field(
        default_factory=lambda: list[ColumnInfo]()
    )
    row_count: int = 0
    ragged_row_count: int = 0
    parse_error: str | None = None


class JsonAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["json"] = "json"
    is_valid: bool = False
    max_depth: int = 0
    top_level_keys: list[str] = Field(
        default_factory=lambda: list[str]()
    )  # sorted, unique; empty unless the root is an object
    is_array: bool = False
    error: str | None = None


class TextAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    line_count: int = 0
    encoding_ok: bool = True
    byte_size: int = 0


class BinaryAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["binary"] = "binary"
    byte_size: int = 0
    format: str = "unknown"  # hdf5, netcdf, png, jpeg, pdf, unknown
    reclassified: bool = False  # declared text-like, failed to decode


class ErrorAnalysis(BaseModel):
    """A file that could not be analyzed at all (e.g. unreadable)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    reason: str
    error_class: str = "unknown"


Analysis: TypeAlias = Annotated[
    CsvAnalysis | JsonAnalysis | TextAnalysis | BinaryAnalysis | ErrorAnalysis,
    Field(discriminator="kind"),
]
