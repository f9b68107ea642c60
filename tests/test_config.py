"""Tests for vaultsite.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from vaultsite.config import (
    DEFAULT_TAG,
    ConfigError,
    PublishConfig,
    SiteConfig,
    VaultSiteConfig,
    default_export_dir,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, VaultSiteConfig)
    assert config.root == tmp_path.resolve()
    assert config.site.title == ""
    assert config.site.site_id is None
    assert config.site.tag == DEFAULT_TAG
    assert config.site.path == ""
    assert config.site_config().path == str(tmp_path.resolve() / ".vaultsite" / "repos" / "site")
    assert config.publish == PublishConfig()
    assert config.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".vaultsite.yml"
    config_file.write_text(
        """
site:
  id: handbook
  title: "Team Handbook"
  url: "https://handbook.example.com"
  repo: "https://github.com/acme/handbook.git"
  path: "build/site"
  tag: publish
publish:
  enabled: true
  branch: gh-pages
  message: "docs: refresh handbook"
  push: "yes"
exclude_paths:
  - "Templates/"
  - "*.excalidraw.md"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.site == SiteConfig(
        title="Team Handbook",
        url="https://handbook.example.com",
        repo="https://github.com/acme/handbook.git",
        path=str(tmp_path.resolve() / "build" / "site"),
        site_id="handbook",
        tag="publish",
    )
    assert config.publish.enabled is True
    assert config.publish.branch == "gh-pages"
    assert config.publish.message == "docs: refresh handbook"
    assert config.publish.push is True
    assert config.exclude_paths == ["Templates/", "*.excalidraw.md"]


def test_load_config_accepts_any_path_inside_the_vault(tmp_path: Path) -> None:
    (tmp_path / ".vaultsite.yml").write_text("site:\n  title: Notes\n", encoding="utf-8")

    config = load_config(tmp_path / "Some Note.md")

    assert config.site.title == "Notes"


def test_export_dir_defaults_to_checkout_of_repo(tmp_path: Path) -> None:
    (tmp_path / ".vaultsite.yml").write_text(
        "site:\n  repo: git@github.com:acme/handbook.git\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.site.path == ""
    assert config.site_config().path == str(
        tmp_path.resolve() / ".vaultsite" / "repos" / "github.com" / "acme" / "handbook"
    )


def test_default_export_dir(tmp_path: Path) -> None:
    base = tmp_path / ".vaultsite" / "repos"
    assert default_export_dir(tmp_path, "https://github.com/bar/foo") == base / "github.com/bar/foo"
    assert default_export_dir(tmp_path, "github.com/bar/foo.git") == base / "github.com/bar/foo"
    assert default_export_dir(tmp_path, "") == base / "site"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".vaultsite.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.site.tag == DEFAULT_TAG
    assert config.publish.enabled is False


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".vaultsite.yml").write_text("site: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".vaultsite.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_with_overrides_ignores_empty_values() -> None:
    base = SiteConfig(title="Base", url="https://a.example")

    updated = base.with_overrides(title="", url=None, repo="github.com/x/y", site_id="s")

    assert updated.title == "Base"
    assert updated.url == "https://a.example"
    assert updated.repo == "github.com/x/y"
    assert updated.site_id == "s"
    assert base.repo == ""


def test_site_config_derives_export_dir_from_overridden_repo(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    site = config.site_config(repo="https://github.com/bar/foo.git", title="Foo")

    assert site.title == "Foo"
    assert site.path == str(tmp_path.resolve() / ".vaultsite" / "repos" / "github.com" / "bar" / "foo")


def test_site_config_keeps_configured_path(tmp_path: Path) -> None:
    (tmp_path / ".vaultsite.yml").write_text("site:\n  path: out\n", encoding="utf-8")
    config = load_config(tmp_path)

    assert config.site_config(repo="github.com/x/y").path == str(tmp_path.resolve() / "out")
    assert config.site_config(path="/elsewhere").path == "/elsewhere"
