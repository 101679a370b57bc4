from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from blogsite.hooks.pre_render import PreRenderHook, resolve_hooks
from blogsite.render.render import make_excerpt, markdown_to_html, render_index, render_post
from blogsite.sources.base import Post
from blogsite.sources.posts import load_posts
from blogsite.util.paths import ensure_dir

logger = logging.getLogger(__name__)

_UNSAFE_SEGMENT_RE = re.compile(r"[^\w.-]+")


class BuildError(RuntimeError):
    """The site build was aborted while processing a post."""

    def __init__(self, message: str, post_path: Optional[Path] = None):
        super().__init__(message)
        self.post_path = post_path


@dataclass
class BuildResult:
    posts: List[Post] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    index_path: Optional[Path] = None


def _segment(value) -> str:
    seg = _UNSAFE_SEGMENT_RE.sub("-", str(value).strip().lower()).strip("-")
    # "." and ".." would walk the output tree
    return "" if set(seg) <= {"."} else seg


def permalink_for(post: Post, template: str) -> str:
    """Expand a permalink template such as ``/:year/:month/:day/:title/``."""
    d = post["date"]
    categories = post["data"].get("categories") or []
    if isinstance(categories, str):
        categories = categories.split()
    values = {
        ":categories": "/".join(_segment(c) for c in categories if _segment(c)),
        ":year": f"{d.year:04d}",
        ":month": f"{d.month:02d}",
        ":day": f"{d.day:02d}",
        ":title": _segment(post["slug"]),
    }
    url = template
    # longest placeholders first so ":title" is not eaten by a shorter key
    for key in sorted(values, key=len, reverse=True):
        url = url.replace(key, values[key])
    url = re.sub(r"/{2,}", "/", "/" + url.lstrip("/"))
    return url


def output_path_for(url: str, destination: Path) -> Path:
    """Map a permalink to a file under `destination`.

    Raises BuildError if the result would land outside `destination`.
    """
    rel = url.strip("/")
    if url.endswith("/") or not rel:
        out = destination / rel / "index.html"
    else:
        out = destination / rel
    root = Path(destination).resolve()
    if root not in out.resolve().parents:
        raise BuildError(f"permalink {url!r} resolves outside {destination}")
    return out


def _render_or_fail(post: Optional[Post], render, *args) -> str:
    try:
        return render(*args)
    except Exception as e:
        what = post["path"] if post is not None else "index"
        logger.exception("render failed for %s", what)
        raise BuildError(f"{what}: render failed: {e}", post["path"] if post is not None else None) from e


def build_site(cfg: dict, *, pre_render: Optional[Sequence[PreRenderHook]] = None) -> BuildResult:
    """Build the site described by `cfg` (see :func:`blogsite.util.config.load_config`).

    Parameters
    ----------
    cfg : dict
        Loaded site configuration.
    pre_render : sequence of callables or None
        Hooks run on each post before rendering, in order. When None, the
        hooks named under ``hooks.pre_render`` in `cfg` are used.

    Returns
    -------
    BuildResult
        Posts in output order and every file written.

    Raises
    ------
    BuildError
        If hook lookup, a hook, a permalink or the renderer fails. Every
        page is rendered in memory first, so a failed build writes nothing.
    """
    if pre_render is None:
        names = (cfg.get("hooks") or {}).get("pre_render") or []
        try:
            pre_render = resolve_hooks(names, {"titleize_title": cfg.get("titleize") or {}})
        except ValueError as e:
            raise BuildError(str(e)) from e
    hooks = list(pre_render)

    posts = load_posts(cfg["posts_path"])
    destination = Path(cfg["destination_path"])
    layouts_dir = cfg.get("layouts_path")
    excerpt_length = int(cfg.get("excerpt_length", 200))
    result = BuildResult(posts=posts)

    for post in posts:
        for hook in hooks:
            try:
                hook(post)
            except Exception as e:
                logger.exception("pre-render hook %s failed for %s", getattr(hook, "__name__", hook), post["path"])
                raise BuildError(f"{post['path']}: pre-render hook failed: {e}", post["path"]) from e

        post["html"] = markdown_to_html(post["text"])
        post["excerpt"] = make_excerpt(post["html"], excerpt_length)
        post["url"] = permalink_for(post, cfg["permalink"])

    index_path = destination / "index.html"
    owners: Dict[Path, Path] = {index_path.resolve(): Path("index.html")}
    pages: List[Tuple[Path, str]] = []
    for post in posts:
        out = output_path_for(post["url"], destination)
        other = owners.setdefault(out.resolve(), post["path"])
        if other != post["path"]:
            raise BuildError(f"{post['path']}: permalink {post['url']} is already used by {other}", post["path"])
        pages.append((out, _render_or_fail(post, render_post, post, cfg, layouts_dir)))
    pages.append((index_path, _render_or_fail(None, render_index, posts, cfg, layouts_dir)))

    for out, page in pages:
        ensure_dir(out.parent)
        out.write_text(page, encoding="utf-8")
        result.written.append(out)
    result.index_path = index_path

    logger.info("built %d posts into %s", len(posts), destination)
    return result
