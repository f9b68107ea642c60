from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Dict, Mapping

import pytest

from vaultsite.store import MemoryContentStore

STRUCTURE = """\
---
title: Test Site
---
#docusaurus/test/_

![[logo.png|logo]]

# Blog

- [[Blog Simple]]

# Pages

- [[Docs Landing Page]]
- [[Page Simple]]
- [[Page Links]]
- [[Page Slug]]
- [[Obsidian to Docusaurus Mapping]]

# Navbar

- [[Docs Landing Page|My Docs]]
- Menu
	- [[Docs Landing Page]]
	- [[Docs Landing Page|Label]]

# Sidebars

- docs
	- [[Docs Landing Page|Welcome]]
	- [[Page Simple]]
	- [[Page Links]]
	- [[Page Slug]]
	- This Plugin
		- [[Obsidian to Docusaurus Mapping|Mappings]]
"""

SAMPLE_VAULT: Dict[str, str] = {
    "Structure.md": STRUCTURE,
    "Blog Simple.md": "Simplest blog post.\n",
    "Docs Landing Page.md": "---\nslug: /\n---\nWelcome to the docs.\n",
    "Page Simple.md": "Simplest page.",
    "Page Links.md": (
        "Page with links.\n\n"
        "[[Page Simple]]\n\n"
        "[[Page Links]]\n\n"
        "[[Page Slug]]\n\n"
        "[[Blog Simple]]\n"
    ),
    "Page Slug.md": "---\nslug: /slug\n---\nPage with a slug.\n",
    "Obsidian to Docusaurus Mapping.md": "How notes map to pages.\n",
    "Unlisted.md": "Not published anywhere.\n",
    "logo.png": "PNG",
}

SITE_PROPS = {
    "title": "foo",
    "url": "foo.com",
    "repo": "github.com/bar/foo",
    "path": "path/to/repo",
}


class VaultBuilder:
    """Writes vault documents below a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "vault"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> Path:
        """Write ``path -> contents`` entries and return the vault root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return self.root


def dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


@pytest.fixture(autouse=True)
def _propagate_vaultsite_logs():
    """Undo CLI logging setup so caplog sees vaultsite records."""
    logger = logging.getLogger("vaultsite")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_store() -> MemoryContentStore:
    """Provide an in-memory copy of the sample vault."""
    return MemoryContentStore(SAMPLE_VAULT)


@pytest.fixture
def vault_builder(tmp_path: Path) -> VaultBuilder:
    """Provide a vault builder rooted at the pytest tmp_path."""
    return VaultBuilder(tmp_path)
