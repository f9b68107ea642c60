"""Rebuilds nested navigation trees from flat, parent-referenced list items."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Sequence

from ..errors import MalformedOutlineError
from ..logging import get_logger
from ..models import Branch, File, Leaf, ListItem, Outline, TreeNode
from ..store.base import ContentStore, FileLookup
from ..store.outline import list_item_text
from .links import LinkResolver, link_on_line
from .sections import for_heading

logger = get_logger("structure.tree")


def build_tree(path: str, items: Sequence[ListItem], nodes: Sequence[TreeNode]) -> List[TreeNode]:
    """Attach ``nodes`` under their parents in one forward pass.

    ``nodes[i]`` is the node built for ``items[i]``; items must be in
    increasing start line order. A node is reachable by its item's start
    line only once it has been attached, so a parent reference to the item
    itself, a later item or a line that is not an item is rejected.
    """

    roots: List[TreeNode] = []
    index: Dict[int, TreeNode] = {}
    for item, node in zip(items, nodes):
        if item.parent is None:
            roots.append(node)
        else:
            parent = index.get(item.parent)
            if parent is None:
                raise MalformedOutlineError(
                    path,
                    item.start_line,
                    f"parent item on line {item.parent + 1} is not an earlier list item",
                )
            if isinstance(parent, Leaf):
                raise MalformedOutlineError(
                    path,
                    item.start_line,
                    f"parent item on line {item.parent + 1} is a link and cannot hold children",
                )
            parent.children.append(node)
        index[item.start_line] = node
    return roots


async def extract_link_tree(
    store: ContentStore,
    file: File,
    outline: Outline,
    heading: str,
    lookup: FileLookup | None = None,
) -> List[TreeNode]:
    """Convert the list under ``heading`` into a tree of branches and leaves."""
    section = for_heading(outline, heading)
    items = sorted(section.list_items, key=lambda item: item.start_line)
    resolver = LinkResolver(store, file.path, lookup or await store.lookup())

    async def to_node(item: ListItem) -> TreeNode:
        link = link_on_line(section.links, item.start_line)
        if link is not None:
            return await resolver.resolve(link)
        return Branch(label=list_item_text(file.body, item))

    nodes = await asyncio.gather(*(to_node(item) for item in items))
    roots = build_tree(file.path, items, nodes)
    logger.debug("%s: %d items under %r, %d roots", file.path, len(items), heading, len(roots))
    return roots


async def extract_links(
    store: ContentStore,
    file: File,
    outline: Outline,
    heading: str,
    lookup: FileLookup | None = None,
) -> List[Leaf]:
    """Return a leaf for every linked list item under ``heading``, in line order."""
    section = for_heading(outline, heading)
    resolver = LinkResolver(store, file.path, lookup or await store.lookup())
    links = []
    for item in sorted(section.list_items, key=lambda item: item.start_line):
        link = link_on_line(section.links, item.start_line)
        if link is None:
            logger.debug("%s:%d: list item without a link skipped", file.path, item.start_line + 1)
            continue
        links.append(link)
    return list(await asyncio.gather(*(resolver.resolve(link) for link in links)))


__all__ = ["build_tree", "extract_link_tree", "extract_links"]
