"""Markdown outline extraction: headings, links, embeds and nested list items."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import yaml

from ..logging import get_logger
from ..models import Heading, Link, ListItem, Outline

_HEADING = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$")
_FENCE = re.compile(r"^[ \t]*(```|~~~)")
_LIST_ITEM = re.compile(r"^([ \t]*)([-*+]|\d+[.)])(?:[ \t]+|$)")
_BULLET = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s*")
_WIKILINK = re.compile(r"(!?)\[\[([^\[\]|#]*)(#[^\[\]|]*)?(?:\|([^\[\]]*))?\]\]")
_MDLINK = re.compile(r"(!?)\[([^\[\]]*)\]\(<?([^()\s<>]+)>?(?:[ \t]+\"[^\"]*\")?\)")
_TAB_WIDTH = 4

logger = get_logger("outline")


def parse_outline(body: str) -> Outline:
    """Extract the positional outline of a Markdown document.

    Line numbers are zero-based and count frontmatter lines, so they can be
    compared directly against one another. Offsets index into ``body``.
    """

    lines = body.split("\n")
    line_offsets = _line_offsets(lines)
    frontmatter, first_line = _parse_frontmatter(lines)

    outline = Outline(frontmatter=frontmatter)
    # Open list items as (indent, item) pairs, innermost last.
    stack: List[Tuple[int, ListItem]] = []
    current: Optional[ListItem] = None
    previous_blank = False
    in_fence = False

    for number in range(first_line, len(lines)):
        line = lines[number]
        if _FENCE.match(line):
            in_fence = not in_fence
            current = None
            continue
        if in_fence:
            continue

        if not line.strip():
            previous_blank = True
            continue

        heading = _HEADING.match(line)
        if heading:
            outline.headings.append(
                Heading(text=heading.group(2).strip(), level=len(heading.group(1)), line=number)
            )
            stack.clear()
            current = None
            previous_blank = False
            continue

        _collect_links(outline, line, number, line_offsets[number])

        item = _LIST_ITEM.match(line)
        indent = _indent_width(line)
        if item:
            while stack and stack[-1][0] >= indent:
                stack.pop()
            parent = stack[-1][1].start_line if stack else None
            current = ListItem(
                start_line=number,
                end_line=number,
                parent=parent,
                start_offset=line_offsets[number],
                end_offset=line_offsets[number] + len(line),
            )
            outline.list_items.append(current)
            stack.append((indent, current))
        elif current is not None and not previous_blank and indent > stack[-1][0]:
            current.end_line = number
            current.end_offset = line_offsets[number] + len(line)
        elif indent == 0:
            stack.clear()
            current = None
        else:
            current = None
        previous_blank = False

    outline.embeds = [link for link in outline.links if link.embed]
    outline.links = [link for link in outline.links if not link.embed]
    return outline


def list_item_text(body: str, item: ListItem) -> str:
    """Return the literal text of a list item with its bullet marker removed."""
    raw = body[item.start_offset : item.end_offset]
    stripped = _BULLET.sub("", raw, count=1)
    return " ".join(part.strip() for part in stripped.splitlines() if part.strip())


def _collect_links(outline: Outline, line: str, number: int, base: int) -> None:
    found: List[Link] = []
    for match in _WIKILINK.finditer(line):
        target = match.group(2).strip() + (match.group(3) or "")
        alias = match.group(4)
        found.append(
            Link(
                display_text=alias.strip() if alias else target,
                target=target,
                line=number,
                start_offset=base + match.start(),
                end_offset=base + match.end(),
                embed=bool(match.group(1)),
            )
        )
    for match in _MDLINK.finditer(line):
        target = unquote(match.group(3))
        found.append(
            Link(
                display_text=match.group(2).strip() or target,
                target=target,
                line=number,
                start_offset=base + match.start(),
                end_offset=base + match.end(),
                embed=bool(match.group(1)),
            )
        )
    found.sort(key=lambda link: link.start_offset)
    outline.links.extend(found)


def _parse_frontmatter(lines: List[str]) -> Tuple[Dict[str, Any], int]:
    if not lines or lines[0].strip() != "---":
        return {}, 0
    for index in range(1, len(lines)):
        if lines[index].strip() == "---":
            text = "\n".join(lines[1:index])
            try:
                loaded = yaml.safe_load(text) if text.strip() else {}
            except yaml.YAMLError as exc:
                logger.debug("Ignoring unparsable frontmatter: %s", exc)
                loaded = {}
            return (loaded if isinstance(loaded, dict) else {}), index + 1
    return {}, 0


def _line_offsets(lines: List[str]) -> List[int]:
    offsets: List[int] = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + 1
    return offsets


def _indent_width(line: str) -> int:
    prefix = line[: len(line) - len(line.lstrip(" \t"))]
    return len(prefix.expandtabs(_TAB_WIDTH))


__all__ = ["list_item_text", "parse_outline"]
