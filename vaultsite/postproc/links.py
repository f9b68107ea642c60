"""Published URLs for vault documents and link rewriting in copied content."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional, Sequence, Tuple
from urllib.parse import quote

from ..models import Category, Link

_SECTION_ROOTS = {"blog": "/blog", "docs": "/docs"}


def doc_id(source_path: str) -> str:
    """Return the generator's document id: the vault path without its extension."""
    return PurePosixPath(source_path).with_suffix("").as_posix()


def target_url(
    source_path: str, *, slug: Optional[str] = None, category: Optional[Category] = None
) -> Optional[str]:
    """Return the site-absolute URL a published document is served at.

    Unpublished documents (no category) have no URL.
    """
    if category is None:
        return None
    root = _SECTION_ROOTS[category]
    if slug:
        return f"{root}/{slug.lstrip('/')}"
    return f"{root}/{quote(doc_id(source_path))}"


class LinkRewriter:
    """Replaces vault links in a document body with Markdown links to published URLs."""

    def rewrite(self, body: str, replacements: Sequence[Tuple[Link, Optional[str]]]) -> str:
        """Apply ``(link, url)`` replacements; a ``None`` url leaves only the label."""
        ordered = sorted(replacements, key=lambda pair: pair[0].start_offset, reverse=True)
        result = body
        for link, url in ordered:
            label = link.display_text or link.target
            text = f"[{label}]({url})" if url else label
            result = f"{result[: link.start_offset]}{text}{result[link.end_offset :]}"
        return result


__all__ = ["LinkRewriter", "doc_id", "target_url"]
