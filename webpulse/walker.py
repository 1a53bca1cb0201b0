"""Stack-based directory traversal and capped file reads."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_MANIFEST_SIZE
from .logging import get_logger

logger = get_logger("walker")

STACK_LIMIT = 1024

SKIP_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".github",
        "dist",
        "build",
        "coverage",
        "bin",
        ".next",
        ".nuxt",
        ".cache",
        "docs",
        ".vscode",
        ".idea",
    }
)

SOURCE_EXTENSIONS = (
    ".html",
    ".htm",
    ".css",
    ".js",
    ".mjs",
    ".cjs",
    ".jsx",
    ".ts",
    ".tsx",
    ".vue",
    ".xml",
    ".json",
)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp", ".ico")

WORKSPACE_MARKERS = ("lerna.json", "pnpm-workspace.yaml", "rush.json", "nx.json")


@dataclass
class WalkEntry:
    """One visited directory or file."""

    path: Path
    relative_path: str
    kind: str  # "directory", "source", "image" or "other"
    depth: int

    @property
    def name(self) -> str:
        return self.path.name


def classify_file(name: str) -> str:
    lowered = name.lower()
    if lowered.endswith(IMAGE_EXTENSIONS):
        return "image"
    if lowered.endswith(SOURCE_EXTENSIONS):
        return "source"
    return "other"


class DirectoryWalker:
    """Pre-order traversal driven by an explicit LIFO stack.

    Entries of each directory are visited in name order. Skipped directory
    names are never entered; a full stack or the depth cap stops descent
    silently. Symlinked directories are not followed.
    """

    def __init__(
        self,
        exclude_dirs: Iterable[str] = (),
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        stack_limit: int = STACK_LIMIT,
    ) -> None:
        self.skip_dirs = SKIP_DIRS.union(exclude_dirs)
        self.max_depth = max_depth
        self.stack_limit = stack_limit

    def walk(self, root: str | Path) -> Iterator[WalkEntry]:
        """Yield directories and files under ``root``; raise if ``root`` is unusable."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        stack: List[Tuple[Path, int]] = [(root_path, 0)]
        while stack:
            directory, depth = stack.pop()
            try:
                with os.scandir(directory) as iterator:
                    entries = sorted(iterator, key=lambda entry: entry.name)
            except OSError as exc:
                if directory == root_path:
                    raise
                logger.debug("Skipping unreadable directory %s: %s", directory, exc)
                continue

            yield WalkEntry(directory, _relative(directory, root_path), "directory", depth)

            subdirectories: List[Path] = []
            for entry in entries:
                if entry.name in (".", ".."):
                    continue
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    continue
                path = Path(entry.path)
                if is_dir:
                    if entry.name not in self.skip_dirs:
                        subdirectories.append(path)
                    continue
                yield WalkEntry(path, _relative(path, root_path), classify_file(entry.name), depth)

            if depth + 1 > self.max_depth:
                if subdirectories:
                    logger.debug("Depth cap reached below %s", directory)
                continue
            room = max(self.stack_limit - len(stack), 0)
            if len(subdirectories) > room:
                logger.debug(
                    "Directory stack full; skipping %d directories under %s",
                    len(subdirectories) - room,
                    directory,
                )
                subdirectories = subdirectories[:room]
            for path in reversed(subdirectories):
                stack.append((path, depth + 1))


def _relative(path: Path, root: Path) -> str:
    if path == root:
        return ""
    return path.relative_to(root).as_posix()


def read_file_content(path: str | Path, limit: int = DEFAULT_MAX_FILE_SIZE) -> Optional[str]:
    """Return the file's text, or None when it is empty, unreadable or over ``limit`` bytes."""
    file_path = Path(path)
    try:
        size = file_path.stat().st_size
        if size <= 0 or size > limit:
            logger.debug("Skipping %s (%d bytes, limit %d)", file_path, size, limit)
            return None
        data = file_path.read_bytes()
    except OSError as exc:
        logger.debug("Skipping unreadable file %s: %s", file_path, exc)
        return None
    return data.decode("utf-8", errors="replace")


def has_workspace_marker(directory: Path) -> bool:
    """Return True when ``directory`` holds a monorepo marker or a workspaces package.json."""
    for marker in WORKSPACE_MARKERS:
        if (directory / marker).is_file():
            return True
    manifest = directory / "package.json"
    if manifest.is_file():
        content = read_file_content(manifest, limit=DEFAULT_MAX_MANIFEST_SIZE)
        if content is not None and '"workspaces"' in content:
            return True
    return False


__all__ = [
    "DirectoryWalker",
    "IMAGE_EXTENSIONS",
    "SKIP_DIRS",
    "SOURCE_EXTENSIONS",
    "STACK_LIMIT",
    "WORKSPACE_MARKERS",
    "WalkEntry",
    "classify_file",
    "has_workspace_marker",
    "read_file_content",
]
