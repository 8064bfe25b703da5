"""Walk a dataset directory into an ordered list of FileRecords."""

from __future__ import annotations

import logging
from pathlib import Path

import pathspec

from preflight.analysis.classifier import classify, read_prefix
from preflight.config import Settings
from preflight.scanner.schemas import FileRecord

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """The dataset root itself cannot be scanned."""


def scan_directory(
    root: Path,
    settings: Settings | None = None,
) -> list[FileRecord]:
    """Return every regular file under ``root``, sorted by relative path.

    * Skips hidden entries and directories listed in
      ``settings.skip_directories``.
    * Honours patterns from ``root/.gitignore``.
    * Skips symlinks that resolve outside the root.
    * Does not descend more than ``settings.max_scan_depth`` levels.
    * Classifies each file from its first ``classifier_prefix_bytes``
      bytes; an unreadable file is classified by extension alone and
      left for the analysis stage to report.

    Raises:
        ScanError: ``root`` is missing or not a directory.
    """
    cfg = settings if settings is not None else Settings()
    if not root.exists():
        raise ScanError(f"{root} does not exist")
    if not root.is_dir():
        raise ScanError(f"{root} is not a directory")

    spec = _load_gitignore(root)
    walker = _Walker(
        root=root,
        resolved_root=root.resolve(),
        skip_dirs=set(cfg.skip_directories),
        gitignore=spec,
        max_depth=cfg.max_scan_depth,
    )
    records = [
        _build_record(path, root, cfg) for path in walker.walk(root, 0)
    ]
    records.sort(key=lambda r: r.path)
    logger.info("event=scan_complete root=%s files=%d", root, len(records))
    return records


class _Walker:
    def __init__(
        self,
        root: Path,
        resolved_root: Path,
        skip_dirs: set[str],
        gitignore: pathspec.PathSpec,
        max_depth: int,
    ) -> None:
        self.root = root
        self.resolved_root = resolved_root
        self.skip_dirs = skip_dirs
        self.gitignore = gitignore
        self.max_depth = max_depth

    def walk(self, current: Path, depth: int) -> list[Path]:
        """Recursive walk helper with symlink protection."""
        files: list[Path] = []
        try:
            entries = sorted(current.iterdir())
        except OSError as exc:
            logger.warning(
                "event=dir_unreadable path=%s error=%s", current, exc
            )
            return files
        for item in entries:
            if item.name.startswith("."):
                continue
            if item.is_symlink():
                resolved = item.resolve()
                if not resolved.is_relative_to(self.resolved_root):
                    logger.debug("event=symlink_skipped path=%s", item)
                    continue
            rel = item.relative_to(self.root).as_posix()
            if item.is_dir():
                if item.name in self.skip_dirs:
                    continue
                if self.gitignore.match_file(rel + "/"):
                    continue
                if depth >= self.max_depth:
                    logger.debug("event=depth_limit path=%s", rel)
                    continue
                files.extend(self.walk(item, depth + 1))
            elif item.is_file():
                if not self.gitignore.match_file(rel):
                    files.append(item)
        return files


def _build_record(path: Path, root: Path, cfg: Settings) -> FileRecord:
    rel = path.relative_to(root).as_posix()
    stat = path.stat()
    extension = path.suffix.lower().lstrip(".")
    try:
        prefix = read_prefix(path, cfg.classifier_prefix_bytes)
    except OSError:
        prefix = b""
    return FileRecord(
        path=rel,
        full_path=path,
        size_bytes=stat.st_size,
        modified=stat.st_mtime,
        extension=extension,
        kind=classify(prefix, extension, cfg.binary_control_ratio),
    )


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.PathSpec.from_lines("gitwildmatch", [])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitwildmatch", f)
    except OSError:
        return pathspec.PathSpec.from_lines("gitwildmatch", [])
