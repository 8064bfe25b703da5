"""Environment-based configuration and application constants."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from preflight.constants import FileKind

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and PREFLIGHT_* environment variables."""

    # Streaming
    chunk_size_bytes: int = Field(default=65_536, gt=0)

    # Content classifier
    classifier_prefix_bytes: int = Field(default=512, gt=0)
    binary_control_ratio: float = Field(default=0.3, gt=0.0, le=1.0)

    # CSV analysis
    delimiter_sample_rows: int = Field(default=10, gt=0)
    delimiter_sample_max_bytes: int = Field(default=1_048_576, gt=0)
    type_threshold: float = Field(default=0.8, gt=0.0, le=1.0)

    # JSON analysis (recursion-bounded, stays well under the interpreter limit)
    max_json_depth: int = Field(default=64, ge=1, le=256)

    # Validation
    max_document_bytes: int = Field(default=1_048_576, gt=0)
    large_file_bytes: int = 1_073_741_824  # 1GB

    # Scanning
    max_scan_depth: int = Field(default=20, ge=0)
    hash_files: bool = True
    skip_directories: Annotated[list[str], NoDecode] = [
        "node_modules",
        "__pycache__",
        "target",
        ".git",
        ".svn",
        ".hg",
    ]

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("skip_directories", mode="before")
    @classmethod
    def _parse_skip_dirs(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("skip_directories")
    @classmethod
    def _validate_skip_dirs(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        dupes: list[str] = []
        for d in v:
            if d in seen:
                dupes.append(d)
            seen.add(d)
        if dupes:
            logger.warning(
                "Duplicate entries in PREFLIGHT_SKIP_DIRECTORIES: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return level

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "PREFLIGHT_",
        "extra": "ignore",
    }


# File extension (lower-case, no dot) → advisory structural kind.
# Anything not listed here is treated as text unless its bytes say binary.
EXTENSION_KINDS: dict[str, FileKind] = {
    "csv": FileKind.CSV,
    "tsv": FileKind.CSV,
    "json": FileKind.JSON,
}

# Binary magic numbers → format label
BINARY_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89HDF\r\n\x1a\n", "hdf5"),
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"\xff\xd8\xff", "jpeg"),
    (b"%PDF-", "pdf"),
    (b"CDF\x01", "netcdf"),
    (b"CDF\x02", "netcdf"),
)
