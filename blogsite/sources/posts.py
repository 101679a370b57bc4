from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import List

import frontmatter
import yaml
from dateutil import parser as dateparse

from .base import Post, PostError

logger = logging.getLogger(__name__)

POST_NAME_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})-(.+)\.(md|markdown)$")


def split_front_matter(raw: str) -> tuple[dict, str]:
    """Split a `---` delimited YAML header from the Markdown body."""
    text = raw.lstrip("\ufeff")
    handler = frontmatter.YAMLHandler()
    if not handler.detect(text):
        raise PostError("missing front matter block")
    try:
        fm, body = handler.split(text)
    except ValueError as e:
        raise PostError("unterminated front matter block") from e
    # handler.load rather than frontmatter.loads: loads drops non-mapping headers
    try:
        data = handler.load(fm)
    except yaml.YAMLError as e:
        raise PostError(f"invalid front matter: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise PostError(f"front matter must be a mapping, got {type(data).__name__}")
    return data, body.lstrip("\r\n")


def _coerce_date(value, fallback: datetime) -> datetime:
    if value is None:
        return fallback
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return dateparse.parse(str(value))
    except (ValueError, OverflowError) as e:
        raise PostError(f"invalid date {value!r}") from e


def load_post(path: Path) -> Post:
    path = Path(path)
    m = POST_NAME_RE.match(path.name)
    if not m:
        raise PostError(f"{path.name}: post file names must look like YYYY-MM-DD-slug.md")
    name_date = datetime.strptime(m.group(1), "%Y-%m-%d")
    slug = m.group(2)

    try:
        data, body = split_front_matter(path.read_text(encoding="utf-8-sig"))
    except PostError as e:
        raise PostError(f"{path}: {e}") from e

    return Post(
        id=f"{name_date.date().isoformat()}-{slug}",
        path=path,
        slug=slug,
        date=_coerce_date(data.get("date"), name_date),
        data=data,
        text=body,
    )


def load_posts(posts_dir: Path) -> List[Post]:
    """Load every post under `posts_dir`, newest first.

    Files whose names do not follow the post naming scheme are skipped, as
    are posts marked ``published: false``.
    """
    posts_dir = Path(posts_dir)
    if not posts_dir.is_dir():
        logger.warning("posts directory %s does not exist; no posts loaded", posts_dir)
        return []

    posts: List[Post] = []
    for path in sorted(posts_dir.rglob("*")):
        if not path.is_file():
            continue
        if not POST_NAME_RE.match(path.name):
            logger.debug("skipping %s: not a post file", path)
            continue
        post = load_post(path)
        if post["data"].get("published", True) is False:
            logger.debug("skipping unpublished post %s", path)
            continue
        posts.append(post)

    posts.sort(key=lambda p: (p["date"].replace(tzinfo=None), p["slug"]), reverse=True)
    logger.info("loaded %d posts from %s", len(posts), posts_dir)
    return posts
