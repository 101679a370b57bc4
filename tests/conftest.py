"""Shared fixtures: a throwaway site directory with a config and _posts/."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def write_post(posts_dir: Path, name: str, front_matter: str, body: str = "Hello.\n") -> Path:
    posts_dir.mkdir(parents=True, exist_ok=True)
    path = posts_dir / name
    path.write_text(f"---\n{front_matter}---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    (tmp_path / "_config.yml").write_text(
        "title: Test Blog\npermalink: /posts/:title/\n", encoding="utf-8"
    )
    posts = tmp_path / "_posts"
    write_post(posts, "2024-03-02-nix-store.md", "title: my trip to the nix store\n")
    write_post(
        posts,
        "2024-06-18-pinning-python.md",
        "title: pinning python to 3.11.11\ntags: [nix, python]\n",
        "Pin it:\n\n```nix\npython311\n```\n",
    )
    return tmp_path


@pytest.fixture
def make_post():
    return write_post
