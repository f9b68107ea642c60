"""Error taxonomy for structure extraction and site assembly."""

from __future__ import annotations

from typing import Sequence


class VaultSiteError(RuntimeError):
    """Base class for errors that abort or degrade a site build."""


class StructureNotFoundError(VaultSiteError):
    """Raised when no document in the vault carries the structure marker."""

    def __init__(self, tag: str, site_id: str | None = None) -> None:
        self.tag = tag
        self.site_id = site_id
        marker = f"#{tag}/{site_id or '<id>'}/_"
        super().__init__(f"No structure document found carrying {marker}")


class AmbiguousStructureError(VaultSiteError):
    """Raised when more than one structure document matches."""

    def __init__(self, paths: Sequence[str]) -> None:
        self.paths = list(paths)
        joined = ", ".join(self.paths)
        super().__init__(
            f"Expected exactly one structure document, found {len(self.paths)}: {joined}"
        )


class MalformedOutlineError(VaultSiteError):
    """Raised when a list item points at a parent that cannot hold it."""

    def __init__(self, path: str, line: int, reason: str) -> None:
        self.path = path
        self.line = line
        self.reason = reason
        # Lines are zero-based internally; report them the way editors show them.
        super().__init__(f"{path}:{line + 1}: {reason}")


class UnresolvedLinkError(VaultSiteError):
    """Raised when a link target does not match any document in the vault."""

    def __init__(self, target: str, source_path: str | None = None) -> None:
        self.target = target
        self.source_path = source_path
        where = f" (linked from {source_path})" if source_path else ""
        super().__init__(f"Link target not found: {target}{where}")


__all__ = [
    "AmbiguousStructureError",
    "MalformedOutlineError",
    "StructureNotFoundError",
    "UnresolvedLinkError",
    "VaultSiteError",
]
