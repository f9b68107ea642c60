"""Site assembly: manifest lookup, content indices, navigation trees and export."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_TITLE, PublishConfig, SiteConfig
from .errors import AmbiguousStructureError, StructureNotFoundError, UnresolvedLinkError
from .git.publisher import Publisher
from .logging import get_logger
from .models import (
    Document,
    DocumentIndex,
    File,
    Leaf,
    Link,
    Outline,
    Site,
    SiteFile,
    SiteIndex,
)
from .postproc.links import LinkRewriter, target_url
from .store.base import ContentStore, FileLookup, ref
from .store.outline import parse_outline
from .structure import (
    LinkResolver,
    categorize,
    extract_link_tree,
    extract_links,
    find_structure_files,
    is_external,
    resolve_target,
)
from .writer import SiteWriter

BLOG_HEADING = "Blog"
PAGES_HEADING = "Pages"
SIDEBARS_HEADING = "Sidebars"
NAVBAR_HEADING = "Navbar"


@dataclass
class ExportOutcome:
    """Result of an export run."""

    site: Site
    files: List[str]
    published: bool


class SiteBuilder:
    """Assembles a Site from the structure manifest in a content store."""

    def __init__(
        self,
        store: ContentStore,
        *,
        writer: SiteWriter | None = None,
        rewriter: LinkRewriter | None = None,
        publisher: Publisher | None = None,
    ) -> None:
        self.store = store
        self.writer = writer or SiteWriter(store)
        self.rewriter = rewriter or LinkRewriter()
        self.publisher = publisher
        self.logger = get_logger("pipeline")

    async def build(self, config: SiteConfig, lookup: FileLookup | None = None) -> Site:
        """Build the navigation model for the site described by ``config``.

        Content bodies are not loaded; see :meth:`enrich_content`. The vault
        is listed once and every link is resolved against that listing.
        """
        lookup = lookup or await self.store.lookup()
        site = Site(title=config.title, url=config.url, repo=config.repo, path=config.path)

        structure = await self.find_structure(config, lookup)
        file = structure.structure_file
        self.logger.info("Building site %r from %s", structure.id, file.path)
        outline = await self.store.get_metadata(file)

        index = await self.build_index(site, file, outline, lookup)
        await self.build_navigation(site, file, outline, index, lookup)

        site.logo.path = self._resolve_logo(file, outline, lookup)
        if not site.title:
            site.title = str(outline.frontmatter.get("title") or DEFAULT_TITLE)

        self.logger.debug(
            "Site %r: %d posts, %d docs, %d navbar items, %d sidebars",
            structure.id,
            len(site.blog.posts),
            len(site.pages.docs),
            len(site.navbar.items),
            len(site.sidebar.items),
        )
        return site

    async def find_structure(
        self, config: SiteConfig, lookup: FileLookup | None = None
    ) -> SiteFile:
        """Return the single manifest for ``config``, or raise."""
        found = await find_structure_files(self.store, config.tag, lookup)
        if config.site_id is not None:
            found = [candidate for candidate in found if candidate.id == config.site_id]
        if not found:
            raise StructureNotFoundError(config.tag, config.site_id)
        if len(found) > 1:
            raise AmbiguousStructureError([candidate.structure_file.path for candidate in found])
        return found[0]

    async def build_index(
        self, site: Site, file: File, outline: Outline, lookup: FileLookup | None = None
    ) -> SiteIndex:
        """First phase: populate the blog and pages indices."""
        blog, pages = await asyncio.gather(
            extract_links(self.store, file, outline, BLOG_HEADING, lookup),
            extract_links(self.store, file, outline, PAGES_HEADING, lookup),
        )
        site.blog.posts = self._key_by_path(blog, file.path)
        site.pages.docs = self._key_by_path(pages, file.path)
        return site.index()

    async def build_navigation(
        self,
        site: Site,
        file: File,
        outline: Outline,
        index: SiteIndex,
        lookup: FileLookup | None = None,
    ) -> None:
        """Second phase: build and categorize the sidebar and navbar trees."""
        sidebar, navbar = await asyncio.gather(
            extract_link_tree(self.store, file, outline, SIDEBARS_HEADING, lookup),
            extract_link_tree(self.store, file, outline, NAVBAR_HEADING, lookup),
        )
        categorize(sidebar, index)
        categorize(navbar, index)
        if index.posts:
            navbar.append(Leaf(label="Blog", source_path="/blog"))
        site.sidebar.items = sidebar
        site.navbar.items = navbar

    async def enrich_content(self, site: Site) -> None:
        """Load the body of every indexed post and doc."""

        async def load(doc: Document) -> None:
            try:
                doc.content = (await self.store.load_file(ref(doc.source_path))).body
            except FileNotFoundError:
                self.logger.warning("Cannot load %s: not found in the vault", doc.source_path)

        await asyncio.gather(*(load(doc) for doc in _documents(site)))

    async def replace_links(
        self, doc: Document, site: Site, lookup: FileLookup | None = None
    ) -> None:
        """Point the links in an enriched document at their published URLs.

        Links to documents that are not published are reduced to their label.
        """
        if doc.content is None:
            return
        outline = parse_outline(doc.content)
        resolver = LinkResolver(self.store, doc.source_path, lookup or await self.store.lookup())
        index = site.index()

        async def replacement(link: Link) -> Tuple[Link, Optional[str]]:
            leaf = await resolver.resolve(link)
            category = index.category_for(leaf.source_path)
            return link, target_url(leaf.source_path, slug=leaf.slug, category=category)

        internal = [link for link in outline.links if not is_external(link.target)]
        replacements = await asyncio.gather(*(replacement(link) for link in internal))
        doc.content = self.rewriter.rewrite(doc.content, replacements)

    async def write(self, site: Site) -> List[str]:
        return await self.writer.write(site)

    async def export(self, config: SiteConfig, publish: PublishConfig | None = None) -> ExportOutcome:
        """Build, enrich, rewrite links, write and optionally publish the site."""
        lookup = await self.store.lookup()
        site = await self.build(config, lookup)
        await self.enrich_content(site)
        await asyncio.gather(
            *(self.replace_links(doc, site, lookup) for doc in _documents(site))
        )
        files = await self.write(site)

        published = False
        if publish is not None and publish.enabled:
            if self.publisher is None:
                self.logger.warning("Publishing requested but no publisher configured")
            else:
                published = await asyncio.to_thread(
                    self.publisher.publish,
                    site.path,
                    files,
                    message=publish.message,
                    branch=publish.branch,
                    push=publish.push,
                )
        self.logger.info("Exported %d files to %s", len(files), site.path)
        return ExportOutcome(site=site, files=files, published=published)

    # ------------------------------------------------------------------
    # Helpers

    def _resolve_logo(self, file: File, outline: Outline, lookup: FileLookup) -> str:
        embed = next(
            (embed for embed in outline.embeds if embed.display_text.lower() == "logo"), None
        )
        if embed is None:
            return ""
        try:
            logo = resolve_target(lookup, embed.target, file.path)
        except UnresolvedLinkError as exc:
            self.logger.warning("%s:%d: logo %s", file.path, embed.line + 1, exc)
            return ""
        return logo.path

    def _key_by_path(self, leaves: Sequence[Leaf], manifest: str) -> DocumentIndex:
        index: Dict[str, Document] = {}
        for leaf in leaves:
            if leaf.source_path in index:
                self.logger.debug("%s: %s listed twice", manifest, leaf.source_path)
                continue
            index[leaf.source_path] = Document(
                source_path=leaf.source_path, label=leaf.label, slug=leaf.slug
            )
        return index


def _documents(site: Site) -> Iterable[Document]:
    yield from site.blog.posts.values()
    yield from site.pages.docs.values()


__all__ = ["ExportOutcome", "SiteBuilder"]
