"""Post-processing of exported content."""

from .links import LinkRewriter, doc_id, target_url

__all__ = ["LinkRewriter", "doc_id", "target_url"]
