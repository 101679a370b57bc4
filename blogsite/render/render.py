from pathlib import Path
from typing import Optional, Sequence

import markdown
from bs4 import BeautifulSoup
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PrefixLoader, Template

from blogsite.sources.base import Post

TEMPLATES_DIR = Path(__file__).parent / "templates"
MARKDOWN_EXTENSIONS = ("fenced_code", "tables")


def markdown_to_html(text: str) -> str:
    return markdown.markdown(text or "", extensions=list(MARKDOWN_EXTENSIONS))


def make_excerpt(html: str, limit: int = 200) -> str:
    """Plain-text excerpt of rendered HTML, cut on a word boundary."""
    text = BeautifulSoup(html or "", "html.parser").get_text(" ", strip=True)
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0] or text[:limit]
    return cut.rstrip(",.;:") + "…"


def _environment(layouts_dir: Optional[Path] = None) -> Environment:
    default = FileSystemLoader(str(TEMPLATES_DIR))
    loaders = [FileSystemLoader(str(layouts_dir))] if layouts_dir is not None else []
    # "default/<name>" lets a site layout extend the packaged one it replaces
    loaders += [default, PrefixLoader({"default": default})]
    return Environment(loader=ChoiceLoader(loaders))


def load_layout(name: str, layouts_dir: Optional[Path] = None) -> Template:
    """Load layout `name`; a site's own ``<name>.html.j2`` wins over the default.

    Site layouts may ``{% extends %}`` or ``{% include %}`` each other and the
    packaged templates. Raises ``jinja2.TemplateNotFound`` for unknown names.
    """
    return _environment(layouts_dir).get_template(f"{name}.html.j2")


def display_title(post: Post) -> str:
    title = post["data"].get("title")
    return str(title) if title not in (None, "") else post["slug"]


def render_post(post: Post, site: dict, layouts_dir: Optional[Path] = None) -> str:
    layout = load_layout(post["data"].get("layout") or "post", layouts_dir)
    return layout.render(
        site=site,
        post=post,
        page=post["data"],
        title=display_title(post),
        content=post.get("html", ""),
    )


def render_index(posts: Sequence[Post], site: dict, layouts_dir: Optional[Path] = None) -> str:
    entries = [
        {
            "title": display_title(p),
            "url": p.get("url", ""),
            "date": p["date"].date().isoformat(),
            "excerpt": p.get("excerpt", ""),
        }
        for p in posts
    ]
    return load_layout("index", layouts_dir).render(site=site, posts=entries)
