"""Renders Docusaurus configuration files from a Site model."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .logging import get_logger
from .models import Branch, Leaf, Navbar, Sidebar, Site, TreeNode
from .postproc.links import doc_id, target_url
from .structure.links import is_external

LOGO_PATH = "static/img/logo.png"
FAVICON_PATH = "static/img/favicon.png"

# Output file -> template name.
_OUTPUTS: Dict[str, str] = {
    ".gitignore": "gitignore.j2",
    "package.json": "package.json.j2",
    "babel.config.js": "babel.config.js.j2",
    "docusaurus.config.js": "docusaurus.config.js.j2",
    "sidebars.js": "sidebars.js.j2",
    "src/pages/index.js": "index.js.j2",
    "src/pages/styles.module.css": "styles.module.css.j2",
    "src/css/custom.css": "custom.css.j2",
}

logger = get_logger("render")


def navbar_to_items(navbar: Navbar) -> List[Dict[str, Any]]:
    """Convert navbar nodes into Docusaurus ``themeConfig.navbar.items``."""
    items: List[Dict[str, Any]] = []
    for node in navbar.items:
        item = _navbar_item(node)
        if item is not None:
            item["position"] = "left"
            items.append(item)
    return items


def sidebars_to_dict(sidebar: Sidebar) -> Dict[str, List[Dict[str, Any]]]:
    """Convert sidebar roots into a Docusaurus sidebars object, one sidebar per root."""
    result: Dict[str, List[Dict[str, Any]]] = {}
    for root in sidebar.items:
        children = root.children if isinstance(root, Branch) else [root]
        result[root.label] = _sidebar_items(children)
    return result


class SiteRenderer:
    """Renders generator config files from jinja2 templates."""

    def __init__(self, templates_dir: Path | None = None, *, branch: str = "main") -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.branch = branch
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.policies["json.dumps_kwargs"] = {"sort_keys": False, "ensure_ascii": False}

    def render(self, site: Site) -> Dict[str, str]:
        """Return ``{relative output path: file content}``."""
        context = self._context(site)
        return {
            output: self._env.get_template(template).render(**context)
            for output, template in _OUTPUTS.items()
        }

    def _context(self, site: Site) -> Dict[str, Any]:
        host_path, organization, project = _repo_parts(site.repo)
        edit_url = f"https://{host_path}/edit/{self.branch}/" if host_path else None
        navbar_items = navbar_to_items(site.navbar)
        return {
            "title": site.title,
            "url": site.url or "https://netlify.com",
            "organization": organization,
            "project": project,
            "edit_url": edit_url,
            "logo_src": "img/logo.png" if site.logo.path else None,
            "favicon_src": "img/favicon.png",
            "navbar_items": navbar_items,
            "home_link": _home_link(site, navbar_items),
            "sidebars": sidebars_to_dict(site.sidebar),
            "show_blog": bool(site.blog.posts),
        }


def _navbar_item(node: TreeNode) -> Optional[Dict[str, Any]]:
    if isinstance(node, Branch):
        children = [item for item in map(_navbar_item, node.children) if item is not None]
        return {"label": node.label, "type": "dropdown", "items": children}
    link = _leaf_link(node)
    if link is None:
        logger.debug("Navbar entry %r points at unpublished %s", node.label, node.source_path)
        return None
    key, value = link
    return {"label": node.label, key: value}


def _home_link(site: Site, navbar_items: List[Dict[str, Any]]) -> Optional[str]:
    """Where the home page button points: the first navbar page, else the first doc."""
    pending = list(navbar_items)
    while pending:
        item = pending.pop(0)
        if "to" in item:
            return item["to"]
        pending[:0] = item.get("items", [])
    first_doc = next(iter(site.pages.docs.values()), None)
    if first_doc is not None:
        return target_url(first_doc.source_path, slug=first_doc.slug, category="docs")
    return "/blog" if site.blog.posts else None


def _sidebar_items(nodes: List[TreeNode]) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    for node in nodes:
        if isinstance(node, Branch):
            items.append(
                {"type": "category", "label": node.label, "items": _sidebar_items(node.children)}
            )
            continue
        if node.category == "docs":
            items.append({"type": "doc", "id": doc_id(node.source_path), "label": node.label})
            continue
        link = _leaf_link(node)
        if link is None:
            logger.debug("Sidebar entry %r points at unpublished %s", node.label, node.source_path)
            continue
        items.append({"type": "link", "label": node.label, "href": link[1]})
    return items


def _leaf_link(leaf: Leaf) -> Optional[Tuple[str, str]]:
    url = target_url(leaf.source_path, slug=leaf.slug, category=leaf.category)
    if url is not None:
        return "to", url
    if is_external(leaf.source_path):
        return "href", leaf.source_path
    if leaf.source_path.startswith("/"):
        return "to", leaf.source_path
    return None


def _repo_parts(repo: str) -> Tuple[str, str, str]:
    cleaned = repo.strip()
    for prefix in ("https://", "http://"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix) :]
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    cleaned = cleaned.strip("/")
    parts = cleaned.split("/")
    if len(parts) < 3:
        return cleaned, "", parts[-1] if cleaned else ""
    return cleaned, parts[-2], parts[-1]


__all__ = ["FAVICON_PATH", "LOGO_PATH", "SiteRenderer", "navbar_to_items", "sidebars_to_dict"]
