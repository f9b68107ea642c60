"""Writes an assembled Site into the generator's directory layout."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from .logging import get_logger
from .models import Document, FileRef, Site
from .render import FAVICON_PATH, LOGO_PATH, SiteRenderer
from .store.base import ContentStore, ref


class SiteWriter:
    """Renders config files and copies published content through a content store."""

    def __init__(self, store: ContentStore, renderer: SiteRenderer | None = None) -> None:
        self.store = store
        self.renderer = renderer or SiteRenderer()
        self.logger = get_logger("writer")

    async def write(self, site: Site) -> List[str]:
        """Write every output of ``site`` concurrently and return the written paths."""
        root = Path(site.path)
        self.logger.info("Writing site %r to %s", site.title, root)

        tasks = [
            self.store.write(content, str(root / name))
            for name, content in self.renderer.render(site).items()
        ]
        if site.logo.path:
            # The logo doubles as the favicon.
            tasks.extend(
                self.store.copy(ref(site.logo.path), str(root / target))
                for target in (LOGO_PATH, FAVICON_PATH)
            )
        tasks.extend(
            self._write_document(post, str(root / "blog" / post.source_path))
            for post in site.blog.posts.values()
        )
        tasks.extend(
            self._write_document(doc, str(root / "docs" / doc.source_path))
            for doc in site.pages.docs.values()
        )

        written = [result.path for result in await asyncio.gather(*tasks) if result is not None]
        self.logger.debug("Wrote %d files", len(written))
        return written

    async def _write_document(self, doc: Document, destination: str) -> Optional[FileRef]:
        if doc.content is not None:
            return await self.store.write(doc.content, destination)
        try:
            return await self.store.copy(ref(doc.source_path), destination)
        except FileNotFoundError:
            self.logger.warning("Skipping %s: not found in the vault", doc.source_path)
            return None


__all__ = ["SiteWriter"]
