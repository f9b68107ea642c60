"""Annotates tree leaves with the section they are published under."""

from __future__ import annotations

from typing import Sequence, assert_never

from ..models import Branch, Leaf, SiteIndex, TreeNode


def categorize(tree: Sequence[TreeNode], index: SiteIndex) -> None:
    """Set ``category`` on every leaf in ``tree`` from its index membership, in place."""
    for node in tree:
        if isinstance(node, Leaf):
            node.category = index.category_for(node.source_path)
        elif isinstance(node, Branch):
            categorize(node.children, index)
        else:
            assert_never(node)


__all__ = ["categorize"]
