"""Restricts an outline to the span owned by one heading."""

from __future__ import annotations

import math
from typing import Iterable, List, TypeVar

from ..models import Heading, Link, ListItem, Outline

_T = TypeVar("_T", Heading, Link, ListItem)


def for_heading(outline: Outline, heading: str) -> Outline:
    """Return the part of ``outline`` strictly between ``heading`` and the next heading.

    Only the first heading whose text equals ``heading`` counts. Items are
    kept by their full span, so an item that straddles either boundary is
    dropped. A missing heading yields an empty outline.
    """

    index = next((i for i, h in enumerate(outline.headings) if h.text == heading), None)
    if index is None:
        return Outline(frontmatter=outline.frontmatter)

    start = outline.headings[index].line
    end = outline.headings[index + 1].line if index + 1 < len(outline.headings) else math.inf

    def in_range(items: Iterable[_T]) -> List[_T]:
        return [item for item in items if _start(item) > start and _end(item) < end]

    return Outline(
        headings=in_range(outline.headings),
        links=in_range(outline.links),
        embeds=in_range(outline.embeds),
        list_items=in_range(outline.list_items),
        frontmatter=outline.frontmatter,
    )


def _start(item: Heading | Link | ListItem) -> int:
    return item.start_line if isinstance(item, ListItem) else item.line


def _end(item: Heading | Link | ListItem) -> int:
    return item.end_line if isinstance(item, ListItem) else item.line


__all__ = ["for_heading"]
