"""Pydantic models for the scanning data flow."""

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict

from preflight.constants import FileKind


class FileRecord(BaseModel):
    """One regular file found under the dataset root.

    ``path`` is relative to the root, POSIX-separated; record lists are
    always ordered lexically by it.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    full_path: Path
    size_bytes: int
    modified: float | None = None
    extension: str = ""  # lower-case, no dot
    kind: FileKind = FileKind.TEXT
    sha256: str | None = None

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def stem(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def depth(self) -> int:
        """Number of path components (``a/b.csv`` is depth 2)."""
        return len(PurePosixPath(self.path).parts)
