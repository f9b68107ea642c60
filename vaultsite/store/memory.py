"""In-memory content store that records every write and copy."""

from __future__ import annotations

from typing import Dict, List, Mapping, Set

from ..models import File, FileRef
from .base import ContentStore, ref


class MemoryContentStore(ContentStore):
    """Serves documents from a mapping and keeps output in memory.

    Used for dry runs and tests: ``writes`` and ``copies`` map each target
    (or source) path to the list of payloads (or destinations) seen.
    """

    def __init__(self, files: Mapping[str, str]) -> None:
        self.files: Dict[str, str] = dict(files)
        self.writes: Dict[str, List[str]] = {}
        self.copies: Dict[str, List[str]] = {}
        self.dirs: Set[str] = set()

    async def get_all_files(self) -> List[FileRef]:
        return [ref(path) for path in self.files]

    async def load_file(self, file: FileRef) -> File:
        try:
            body = self.files[file.path]
        except KeyError:
            raise FileNotFoundError(file.path) from None
        return File(title=file.title, path=file.path, body=body)

    async def copy(self, file: FileRef, new_path: str) -> FileRef:
        if file.path not in self.files:
            raise FileNotFoundError(file.path)
        self.copies.setdefault(file.path, []).append(new_path)
        return ref(new_path)

    async def write(self, data: str, path: str) -> FileRef:
        self.writes.setdefault(path, []).append(data)
        return ref(path)

    async def mkdir(self, path: str) -> None:
        self.dirs.add(path)


__all__ = ["MemoryContentStore"]
