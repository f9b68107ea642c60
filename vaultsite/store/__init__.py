"""Vault access: content stores and outline extraction."""

from .base import ContentStore, FileLookup, ref
from .filesystem import FileSystemContentStore
from .memory import MemoryContentStore
from .outline import list_item_text, parse_outline

__all__ = [
    "ContentStore",
    "FileLookup",
    "FileSystemContentStore",
    "MemoryContentStore",
    "list_item_text",
    "parse_outline",
    "ref",
]
