"""Core data models shared across vaultsite components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

Category = Literal["blog", "docs"]


@dataclass
class FileRef:
    """Reference to a document in the vault. ``path`` is its identity."""

    title: str
    path: str


@dataclass
class File(FileRef):
    """A loaded document."""

    body: str = ""


@dataclass
class Heading:
    text: str
    level: int
    line: int


@dataclass
class Link:
    """A wikilink, Markdown link or embed found in a document."""

    display_text: str
    target: str
    line: int
    start_offset: int = 0
    end_offset: int = 0
    embed: bool = False


@dataclass
class ListItem:
    """A list item span. ``parent`` is the parent item's start line, if any."""

    start_line: int
    end_line: int
    parent: Optional[int] = None
    start_offset: int = 0
    end_offset: int = 0


@dataclass
class Outline:
    """Positional structure of one document."""

    headings: List[Heading] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    embeds: List[Link] = field(default_factory=list)
    list_items: List[ListItem] = field(default_factory=list)
    frontmatter: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SiteFile:
    """A structure manifest and the site id its marker names."""

    id: str
    structure_file: File


@dataclass
class Leaf:
    """Terminal navigation entry pointing at a document or an absolute path."""

    label: str
    source_path: str
    slug: Optional[str] = None
    category: Optional[Category] = None
    kind: Literal["leaf"] = field(default="leaf", init=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"label": self.label, "source_path": self.source_path}
        if self.slug is not None:
            result["slug"] = self.slug
        if self.category is not None:
            result["category"] = self.category
        return result


@dataclass
class Branch:
    """Labelled group of navigation entries."""

    label: str
    children: List["TreeNode"] = field(default_factory=list)
    kind: Literal["branch"] = field(default="branch", init=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "children": [child.to_dict() for child in self.children]}


TreeNode = Union[Leaf, Branch]


@dataclass
class Document:
    """Entry of the blog or pages index."""

    source_path: str
    label: Optional[str] = None
    slug: Optional[str] = None
    category: Optional[Category] = None
    content: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"source_path": self.source_path}
        for name in ("label", "slug", "category", "content"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result


DocumentIndex = Dict[str, Document]


@dataclass(frozen=True)
class SiteIndex:
    """Published content keyed by source path, the input to categorization."""

    posts: Mapping[str, Document]
    docs: Mapping[str, Document]

    def category_for(self, source_path: str) -> Optional[Category]:
        if source_path in self.posts:
            return "blog"
        if source_path in self.docs:
            return "docs"
        return None


@dataclass
class Logo:
    path: str = ""


@dataclass
class Blog:
    posts: DocumentIndex = field(default_factory=dict)


@dataclass
class Pages:
    docs: DocumentIndex = field(default_factory=dict)


@dataclass
class Navbar:
    items: List[TreeNode] = field(default_factory=list)


@dataclass
class Sidebar:
    items: List[TreeNode] = field(default_factory=list)


@dataclass
class Site:
    """In-memory navigation and content model for one exported site."""

    title: str
    url: str
    repo: str
    path: str
    logo: Logo = field(default_factory=Logo)
    blog: Blog = field(default_factory=Blog)
    pages: Pages = field(default_factory=Pages)
    navbar: Navbar = field(default_factory=Navbar)
    sidebar: Sidebar = field(default_factory=Sidebar)

    def index(self) -> SiteIndex:
        return SiteIndex(posts=self.blog.posts, docs=self.pages.docs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "repo": self.repo,
            "path": self.path,
            "logo": {"path": self.logo.path},
            "blog": {"posts": {key: doc.to_dict() for key, doc in self.blog.posts.items()}},
            "pages": {"docs": {key: doc.to_dict() for key, doc in self.pages.docs.items()}},
            "navbar": {"items": [item.to_dict() for item in self.navbar.items]},
            "sidebar": {"items": [item.to_dict() for item in self.sidebar.items]},
        }
