"""Structure extraction: manifest lookup, section slicing, links and trees."""

from .categorizer import categorize
from .links import (
    LinkResolver,
    candidate_paths,
    is_external,
    link_on_line,
    normalize_target,
    resolve_target,
)
from .locator import find_structure_files, marker_pattern, match_structure_file
from .sections import for_heading
from .tree import build_tree, extract_link_tree, extract_links

__all__ = [
    "LinkResolver",
    "build_tree",
    "candidate_paths",
    "categorize",
    "extract_link_tree",
    "extract_links",
    "find_structure_files",
    "for_heading",
    "is_external",
    "link_on_line",
    "marker_pattern",
    "match_structure_file",
    "normalize_target",
    "resolve_target",
]
