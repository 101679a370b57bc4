from datetime import datetime
from pathlib import Path
from typing import TypedDict, Dict, Any


class Post(TypedDict, total=False):
    id: str
    path: Path
    slug: str
    date: datetime
    data: Dict[str, Any]   # front matter; hooks mutate this in place
    text: str              # Markdown body
    html: str
    excerpt: str
    url: str


class PostError(ValueError):
    """A post file could not be parsed."""
