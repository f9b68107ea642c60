"""Tests for writing a site into the export directory."""

from __future__ import annotations

import asyncio
from pathlib import Path

from vaultsite.models import Document, Site
from vaultsite.store import FileSystemContentStore, MemoryContentStore
from vaultsite.writer import SiteWriter


def _site(path: str) -> Site:
    site = Site(title="foo", url="foo.com", repo="github.com/bar/foo", path=path)
    site.logo.path = "assets/logo.png"
    site.blog.posts = {"Post.md": Document(source_path="Post.md", content="rewritten post")}
    site.pages.docs = {"notes/Page.md": Document(source_path="notes/Page.md")}
    return site


def test_writer_lays_out_site_on_disk(vault_builder, tmp_path: Path) -> None:
    vault = vault_builder.write(
        {"assets/logo.png": "PNG", "Post.md": "original post", "notes/Page.md": "page body"}
    )
    out = tmp_path / "out"
    writer = SiteWriter(FileSystemContentStore(vault))

    written = asyncio.run(writer.write(_site(str(out))))

    assert (out / "docusaurus.config.js").is_file()
    assert (out / "src" / "css" / "custom.css").is_file()
    assert (out / "static" / "img" / "logo.png").read_text(encoding="utf-8") == "PNG"
    assert (out / "static" / "img" / "favicon.png").read_text(encoding="utf-8") == "PNG"
    assert "export default function Home" in (out / "src" / "pages" / "index.js").read_text(
        encoding="utf-8"
    )
    assert (out / "src" / "pages" / "styles.module.css").is_file()
    assert (out / "blog" / "Post.md").read_text(encoding="utf-8") == "rewritten post"
    assert (out / "docs" / "notes" / "Page.md").read_text(encoding="utf-8") == "page body"
    assert len(written) == 12


def test_writer_replaces_existing_files(vault_builder, tmp_path: Path) -> None:
    vault = vault_builder.write({"assets/logo.png": "NEW", "Post.md": "", "notes/Page.md": ""})
    out = tmp_path / "out"
    (out / "static" / "img").mkdir(parents=True)
    (out / "static" / "img" / "logo.png").write_text("OLD", encoding="utf-8")

    asyncio.run(SiteWriter(FileSystemContentStore(vault)).write(_site(str(out))))

    assert (out / "static" / "img" / "logo.png").read_text(encoding="utf-8") == "NEW"


def test_writer_skips_missing_documents(caplog) -> None:
    store = MemoryContentStore({"assets/logo.png": "PNG"})

    written = asyncio.run(SiteWriter(store).write(_site("out")))

    assert "out/docs/notes/Page.md" not in written
    assert store.writes["out/blog/Post.md"] == ["rewritten post"]
    assert "notes/Page.md" in caplog.text


def test_writer_without_logo_copies_nothing() -> None:
    store = MemoryContentStore({"notes/Page.md": "body"})
    site = _site("out")
    site.logo.path = ""

    asyncio.run(SiteWriter(store).write(site))

    assert store.copies == {"notes/Page.md": ["out/docs/notes/Page.md"]}
