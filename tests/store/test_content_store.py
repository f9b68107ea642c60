"""Tests for the filesystem and in-memory content stores."""

from __future__ import annotations

import asyncio

import pytest

from vaultsite.errors import UnresolvedLinkError
from vaultsite.models import FileRef
from vaultsite.store import FileSystemContentStore, MemoryContentStore, ref


def test_filesystem_store_lists_files_and_skips_excluded(vault_builder) -> None:
    root = vault_builder.write(
        {
            "Home.md": "home",
            "notes/Deep.md": "deep",
            "templates/Daily.md": "template",
            ".obsidian/app.json": "{}",
            "img/logo.png": "PNG",
        }
    )
    store = FileSystemContentStore(root, exclude_paths=["templates/"])

    all_files = asyncio.run(store.get_all_files())
    text_files = asyncio.run(store.get_text_files())

    assert [f.path for f in all_files] == ["Home.md", "img/logo.png", "notes/Deep.md"]
    assert [f.path for f in text_files] == ["Home.md", "notes/Deep.md"]
    assert text_files[1].title == "Deep.md"


def test_filesystem_store_reads_writes_and_copies(vault_builder, tmp_path) -> None:
    root = vault_builder.write({"Page.md": "---\nslug: /p\n---\nbody\n"})
    store = FileSystemContentStore(root)
    export = tmp_path / "export"

    loaded = asyncio.run(store.load_file(ref("Page.md")))
    meta = asyncio.run(store.get_metadata(ref("Page.md")))
    asyncio.run(store.write("hello", str(export / "a" / "b.txt")))
    asyncio.run(store.copy(ref("Page.md"), str(export / "docs" / "Page.md")))
    asyncio.run(store.copy(ref("Page.md"), str(export / "docs" / "Page.md")))

    assert loaded.body.endswith("body\n")
    assert meta.frontmatter == {"slug": "/p"}
    assert (export / "a" / "b.txt").read_text(encoding="utf-8") == "hello"
    assert (export / "docs" / "Page.md").read_text(encoding="utf-8") == loaded.body


def test_memory_store_records_output() -> None:
    store = MemoryContentStore({"A.md": "a"})

    asyncio.run(store.write("x", "out/x.md"))
    asyncio.run(store.write("y", "out/x.md"))
    asyncio.run(store.copy(ref("A.md"), "out/A.md"))
    asyncio.run(store.mkdir("out/img"))

    assert store.writes == {"out/x.md": ["x", "y"]}
    assert store.copies == {"A.md": ["out/A.md"]}
    assert store.dirs == {"out/img"}
    with pytest.raises(FileNotFoundError):
        asyncio.run(store.load_file(FileRef(title="", path="missing.md")))


def test_resolve_link_prefers_exact_then_relative_then_shortest_suffix() -> None:
    store = MemoryContentStore(
        {
            "Page.md": "root",
            "a/Page.md": "a",
            "a/b/Other.md": "b",
            "z/deep/Other.md": "deep",
            "x/Other.md": "x",
        }
    )

    assert asyncio.run(store.resolve_link("Page.md")).path == "Page.md"
    assert asyncio.run(store.resolve_link("Page.md", "a/Index.md")).path == "Page.md"
    assert asyncio.run(store.resolve_link("Other.md", "a/b/Index.md")).path == "a/b/Other.md"
    assert asyncio.run(store.resolve_link("Other.md", "Home.md")).path == "x/Other.md"


def test_resolve_link_raises_for_missing_target() -> None:
    store = MemoryContentStore({"Page.md": ""})

    with pytest.raises(UnresolvedLinkError) as excinfo:
        asyncio.run(store.resolve_link("Missing.md", "Page.md"))

    assert excinfo.value.target == "Missing.md"
    assert "Page.md" in str(excinfo.value)
