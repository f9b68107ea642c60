"""Configuration loading for vaultsite (.vaultsite.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".vaultsite.yml"
DEFAULT_TITLE = "My Obsidian Export"
DEFAULT_TAG = "docusaurus"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class SiteConfig:
    """Ambient settings for one site build, passed explicitly into the builder."""

    title: str = ""
    url: str = ""
    repo: str = ""
    path: str = ""
    site_id: Optional[str] = None
    tag: str = DEFAULT_TAG

    def with_overrides(self, **overrides: Any) -> "SiteConfig":
        """Return a copy with every non-empty override applied."""
        values = {key: value for key, value in overrides.items() if value not in (None, "")}
        return replace(self, **values)


@dataclass
class PublishConfig:
    """Git publishing of the exported site."""

    enabled: bool = False
    branch: Optional[str] = None
    message: str = "docs: export site via vaultsite"
    push: bool = False


@dataclass
class VaultSiteConfig:
    """Represents the settings defined in .vaultsite.yml."""

    root: Path
    site: SiteConfig = field(default_factory=SiteConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    exclude_paths: List[str] = field(default_factory=list)

    def site_config(self, **overrides: Any) -> SiteConfig:
        """Return the site settings with ``overrides`` applied.

        Without a configured or overridden path, the export directory is the
        checkout of the effective repository, matching where ``clone`` puts it.
        """
        site = self.site.with_overrides(**overrides)
        if not site.path:
            site = replace(site, path=str(default_export_dir(self.root, site.repo)))
        return site


def load_config(config_path: Path) -> VaultSiteConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return VaultSiteConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    site_data = _as_dict(data.get("site"))
    path_str = _as_str(site_data.get("path"))
    site = SiteConfig(
        title=_as_str(site_data.get("title")) or "",
        url=_as_str(site_data.get("url")) or "",
        repo=_as_str(site_data.get("repo")) or "",
        path=str(root / path_str) if path_str else "",
        site_id=_as_str(site_data.get("id")),
        tag=_as_str(site_data.get("tag")) or DEFAULT_TAG,
    )

    publish_data = _as_dict(data.get("publish"))
    publish = PublishConfig()
    if publish_data:
        publish.enabled = _as_bool(publish_data.get("enabled")) or False
        publish.branch = _as_str(publish_data.get("branch"))
        publish.message = _as_str(publish_data.get("message")) or publish.message
        publish.push = _as_bool(publish_data.get("push")) or False

    return VaultSiteConfig(
        root=root,
        site=site,
        publish=publish,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def default_export_dir(root: Path, repo: str) -> Path:
    """Return the checkout directory for ``repo`` under the vault's working area."""
    base = root / ".vaultsite" / "repos"
    cleaned = repo.strip()
    for prefix in ("https://", "http://", "git@"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix) :]
    cleaned = cleaned.replace(":", "/")
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    cleaned = cleaned.strip("/")
    return base / cleaned if cleaned else base / "site"


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
