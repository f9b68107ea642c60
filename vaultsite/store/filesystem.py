"""Content store backed by a vault directory on disk."""

from __future__ import annotations

import asyncio
import os
import shutil
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Sequence

from ..logging import get_logger
from ..models import File, FileRef
from .base import ContentStore, ref

_EXCLUDED_DIRS = {
    ".git",
    ".obsidian",
    ".trash",
    ".vaultsite",
    "node_modules",
    "__pycache__",
}


class FileSystemContentStore(ContentStore):
    """Reads documents from ``root`` and writes output relative to it.

    Output paths may also be absolute, which is how exports outside the
    vault are written.
    """

    def __init__(self, root: Path, exclude_paths: Sequence[str] | None = None) -> None:
        self.root = Path(root).expanduser().resolve()
        self._exclude = [pattern.rstrip("/") for pattern in exclude_paths or [] if pattern]
        self.logger = get_logger("store")

    async def get_all_files(self) -> List[FileRef]:
        return await asyncio.to_thread(self._scan)

    async def load_file(self, file: FileRef) -> File:
        body = await asyncio.to_thread(self.resolve(file.path).read_text, encoding="utf-8")
        return File(title=file.title, path=file.path, body=body)

    async def copy(self, file: FileRef, new_path: str) -> FileRef:
        source = self.resolve(file.path)
        destination = self.resolve(new_path)

        def _copy() -> None:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists():
                destination.unlink()
            shutil.copyfile(source, destination)

        await asyncio.to_thread(_copy)
        self.logger.debug("Copied %s to %s", file.path, destination)
        return ref(new_path)

    async def write(self, data: str, path: str) -> FileRef:
        destination = self.resolve(path)

        def _write() -> None:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(data, encoding="utf-8")

        await asyncio.to_thread(_write)
        self.logger.debug("Wrote %s", destination)
        return ref(path)

    async def mkdir(self, path: str) -> None:
        await asyncio.to_thread(self.resolve(path).mkdir, parents=True, exist_ok=True)

    def resolve(self, path: str) -> Path:
        return self.root / path

    # ------------------------------------------------------------------
    # Helpers

    def _scan(self) -> List[FileRef]:
        refs: List[FileRef] = []
        for current, dirs, files in os.walk(self.root):
            rel_dir = Path(current).relative_to(self.root).as_posix()
            rel_dir = "" if rel_dir == "." else rel_dir
            dirs[:] = sorted(
                name
                for name in dirs
                if name not in _EXCLUDED_DIRS and not self._is_excluded(_join(rel_dir, name))
            )
            for name in sorted(files):
                rel_path = _join(rel_dir, name)
                if not self._is_excluded(rel_path):
                    refs.append(ref(rel_path))
        return refs

    def _is_excluded(self, rel_path: str) -> bool:
        return any(_matches(rel_path, pattern) for pattern in self._exclude)


def _join(directory: str, name: str) -> str:
    return f"{directory}/{name}" if directory else name


def _matches(rel_path: str, pattern: str) -> bool:
    if fnmatchcase(rel_path, pattern) or rel_path.startswith(f"{pattern}/"):
        return True
    if "/" in pattern:
        return False
    return any(fnmatchcase(part, pattern) for part in rel_path.split("/"))


__all__ = ["FileSystemContentStore"]
