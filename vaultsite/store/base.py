"""Base class for the content stores the site builder reads from and writes to."""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Sequence

from ..errors import UnresolvedLinkError
from ..models import File, FileRef, Outline
from .outline import parse_outline

TEXT_SUFFIXES = (".md", ".markdown")


class ContentStore(ABC):
    """Contract for vault access: enumerate, read, resolve links and write output."""

    @abstractmethod
    async def get_all_files(self) -> List[FileRef]:
        """Return every file in the vault, text or binary, in a stable order."""

    @abstractmethod
    async def load_file(self, ref: FileRef) -> File:
        """Read a text document. Raises FileNotFoundError when it is missing."""

    @abstractmethod
    async def copy(self, ref: FileRef, new_path: str) -> FileRef:
        """Copy a vault file to ``new_path``, replacing anything already there."""

    @abstractmethod
    async def write(self, data: str, path: str) -> FileRef:
        """Write ``data`` to ``path``, creating parent directories."""

    @abstractmethod
    async def mkdir(self, path: str) -> None:
        """Create ``path`` and any missing parents."""

    async def get_text_files(self) -> List[FileRef]:
        files = await self.get_all_files()
        return [ref for ref in files if ref.path.lower().endswith(TEXT_SUFFIXES)]

    async def get_metadata(self, ref: FileRef) -> Outline:
        """Return a freshly parsed outline for ``ref``."""
        file = await self.load_file(ref)
        return parse_outline(file.body)

    async def lookup(self) -> "FileLookup":
        """Snapshot the vault listing for repeated link resolution."""
        return FileLookup(await self.get_all_files())

    async def resolve_link(self, target: str, source_path: str | None = None) -> FileRef:
        """Resolve one link target. Rescans the vault; prefer :meth:`lookup` for many."""
        return (await self.lookup()).resolve(target, source_path)


class FileLookup:
    """Resolves link targets against one listing of the vault.

    Tries the exact vault path, then the path relative to the linking
    document, then the shortest path whose trailing segments match.
    """

    def __init__(self, files: Sequence[FileRef]) -> None:
        self.files: List[FileRef] = list(files)
        self._by_path: Dict[str, FileRef] = {file.path: file for file in self.files}

    def text_files(self) -> List[FileRef]:
        return [file for file in self.files if file.path.lower().endswith(TEXT_SUFFIXES)]

    def find(self, target: str, source_path: Optional[str] = None) -> Optional[FileRef]:
        normalised = posixpath.normpath(target.lstrip("/"))
        if normalised in self._by_path:
            return self._by_path[normalised]
        if source_path:
            relative = posixpath.normpath(
                posixpath.join(posixpath.dirname(source_path), normalised)
            )
            if relative in self._by_path:
                return self._by_path[relative]
        suffix = f"/{normalised}"
        matches = [file for file in self.files if file.path.endswith(suffix)]
        if matches:
            return min(matches, key=lambda file: (file.path.count("/"), file.path))
        return None

    def resolve(self, target: str, source_path: Optional[str] = None) -> FileRef:
        found = self.find(target, source_path)
        if found is None:
            raise UnresolvedLinkError(target, source_path)
        return found


def ref(path: str) -> FileRef:
    """Build a FileRef whose title is the file name."""
    return FileRef(title=PurePosixPath(path).name, path=path)


__all__ = ["ContentStore", "FileLookup", "TEXT_SUFFIXES", "ref"]
