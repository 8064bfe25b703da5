"""Dataset scanning: enumerate, classify and hash files."""

from preflight.scanner.schemas import FileRecord
from preflight.scanner.directory import ScanError, scan_directory
from preflight.scanner.hashing import hash_records, sha256_file

__all__ = [
    "FileRecord",
    "ScanError",
    "hash_records",
    "scan_directory",
    "sha256_file",
]
