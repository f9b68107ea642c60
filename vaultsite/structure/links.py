"""Turns raw link references into navigation leaves."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import List, Optional, Sequence

from ..errors import UnresolvedLinkError
from ..logging import get_logger
from ..models import FileRef, Leaf, Link
from ..store.base import TEXT_SUFFIXES, ContentStore, FileLookup

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

# Extensions Obsidian embeds or links as attachments rather than notes.
ATTACHMENT_SUFFIXES = frozenset(
    {
        ".avif", ".bmp", ".gif", ".jpeg", ".jpg", ".png", ".svg", ".webp",
        ".flac", ".m4a", ".mp3", ".ogg", ".wav", ".3gp",
        ".mkv", ".mov", ".mp4", ".ogv", ".webm",
        ".pdf", ".canvas",
    }
)


def is_external(target: str) -> bool:
    return bool(_SCHEME.match(target))


def candidate_paths(target: str) -> List[str]:
    """Vault paths a link target may name, most likely first.

    Note names may contain dots (``v1.2 Release Notes``), so ``.md`` is
    appended unless the target already ends in a note or attachment
    extension; the name as written is kept as a fallback.
    """
    path = target.split("|", 1)[0].split("#", 1)[0].strip()
    if not path:
        return [path]
    suffix = PurePosixPath(path).suffix.lower()
    if suffix in TEXT_SUFFIXES or suffix in ATTACHMENT_SUFFIXES:
        return [path]
    if suffix:
        return [f"{path}.md", path]
    return [f"{path}.md"]


def normalize_target(target: str) -> str:
    """Strip anchors and aliases and default the extension to ``.md``."""
    return candidate_paths(target)[0]


def link_on_line(links: Sequence[Link], line: int) -> Optional[Link]:
    return next((link for link in links if link.line == line), None)


def resolve_target(lookup: FileLookup, target: str, source_path: Optional[str]) -> FileRef:
    """Return the vault file for the first candidate path of ``target``.

    Raises UnresolvedLinkError naming the normalised target when none exists.
    """
    candidates = candidate_paths(target)
    for candidate in candidates:
        found = lookup.find(candidate, source_path)
        if found is not None:
            return found
    raise UnresolvedLinkError(candidates[0], source_path)


class LinkResolver:
    """Resolves links found in ``source_path`` against the store.

    Pass a shared ``lookup`` to resolve many links against one vault listing.
    """

    def __init__(
        self, store: ContentStore, source_path: str, lookup: FileLookup | None = None
    ) -> None:
        self.store = store
        self.source_path = source_path
        self.lookup = lookup
        self.logger = get_logger("structure.links")

    async def resolve(self, link: Link) -> Leaf:
        """Return a leaf for ``link``.

        A target that matches no document still yields a leaf, carrying the
        normalised target and no slug, so one broken link does not sink the
        whole tree.
        """
        label = link.display_text or link.target
        if is_external(link.target):
            return Leaf(label=label, source_path=link.target)

        if self.lookup is None:
            self.lookup = await self.store.lookup()
        try:
            found = resolve_target(self.lookup, link.target, self.source_path)
        except UnresolvedLinkError as exc:
            self.logger.warning("%s:%d: %s", self.source_path, link.line + 1, exc)
            return Leaf(label=label, source_path=exc.target)

        slug = None
        if found.path.lower().endswith(TEXT_SUFFIXES):
            meta = await self.store.get_metadata(found)
            slug = meta.frontmatter.get("slug")
        return Leaf(
            label=label,
            source_path=found.path,
            slug=str(slug) if slug is not None else None,
        )


__all__ = [
    "ATTACHMENT_SUFFIXES",
    "LinkResolver",
    "candidate_paths",
    "resolve_target",
    "is_external",
    "link_on_line",
    "normalize_target",
]
