"""Pydantic models shared by the documentation generators."""

from collections import Counter
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from preflight.scanner.schemas import FileRecord


class GeneratedFile(BaseModel):
    """A template target; ``created`` is False when the file already existed."""

    model_config = ConfigDict(frozen=True)

    path: Path
    created: bool


class DatasetSummary(BaseModel):
    """Dataset-level facts rendered into the documentation templates."""

    model_config = ConfigDict(frozen=True)

    total_files: int = 0
    total_size_bytes: int = 0
    kind_counts: dict[str, int] = Field(default_factory=lambda: dict[str, int]())
    generated_at: datetime

    @classmethod
    def from_records(
        cls, records: list[FileRecord], generated_at: datetime
    ) -> "DatasetSummary":
        counts = Counter(r.kind.value for r in records)
        return cls(
            total_files=len(records),
            total_size_bytes=sum(r.size_bytes for r in records),
            kind_counts=dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))),
            generated_at=generated_at,
        )
