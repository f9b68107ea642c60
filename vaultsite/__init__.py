"""Export a Markdown vault to a Docusaurus site driven by a structure document."""

from .config import SiteConfig, VaultSiteConfig, load_config
from .errors import (
    AmbiguousStructureError,
    MalformedOutlineError,
    StructureNotFoundError,
    UnresolvedLinkError,
    VaultSiteError,
)
from .models import Branch, Document, Leaf, Site, TreeNode
from .pipeline import ExportOutcome, SiteBuilder

__version__ = "0.1.0"

__all__ = [
    "AmbiguousStructureError",
    "Branch",
    "Document",
    "ExportOutcome",
    "Leaf",
    "MalformedOutlineError",
    "SiteBuilder",
    "SiteConfig",
    "Site",
    "StructureNotFoundError",
    "TreeNode",
    "UnresolvedLinkError",
    "VaultSiteConfig",
    "VaultSiteError",
    "load_config",
]
