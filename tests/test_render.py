"""Rendering tests — Markdown conversion, excerpts, layouts."""

from datetime import datetime
from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from blogsite.render.render import (
    display_title,
    load_layout,
    make_excerpt,
    markdown_to_html,
    render_index,
    render_post,
)

SITE = {"title": "Test Blog", "baseurl": "", "description": ""}


def _post(title="My Post", **extra):
    data = {"title": title} if title is not None else {}
    data.update(extra)
    return {
        "slug": "my-post",
        "path": Path("_posts/2024-01-01-my-post.md"),
        "date": datetime(2024, 1, 1),
        "data": data,
        "html": "<p>Body</p>",
        "excerpt": "Body",
        "url": "/posts/my-post/",
    }


def test_fenced_code_is_rendered_as_code_block():
    html = markdown_to_html("Text\n\n```nix\npkgs.hello\n```\n")
    assert "<code" in html
    assert "pkgs.hello" in html


def test_excerpt_strips_tags():
    assert make_excerpt("<p>Hello <em>there</em></p><p>world</p>") == "Hello there world"


def test_excerpt_truncates_on_word_boundary():
    excerpt = make_excerpt("<p>" + "word " * 100 + "</p>", limit=22)
    assert excerpt == "word word word word…"


def test_post_title_is_escaped_and_used():
    page = render_post(_post(title="Tags <b> & Things"), SITE)
    assert "<h1>Tags &lt;b&gt; &amp; Things</h1>" in page
    assert "<p>Body</p>" in page


def test_post_without_title_displays_slug():
    assert display_title(_post(title=None)) == "my-post"


def test_site_layout_overrides_default(tmp_path):
    (tmp_path / "post.html.j2").write_text("custom:{{ title }}", encoding="utf-8")
    assert render_post(_post(), SITE, tmp_path) == "custom:My Post"


def test_front_matter_layout_selects_template(tmp_path):
    (tmp_path / "note.html.j2").write_text("note:{{ page.title }}", encoding="utf-8")
    assert render_post(_post(layout="note"), SITE, tmp_path) == "note:My Post"


def test_unknown_layout_raises(tmp_path):
    with pytest.raises(TemplateNotFound):
        load_layout("missing", tmp_path)


def test_site_layout_can_extend_packaged_default(tmp_path):
    (tmp_path / "post.html.j2").write_text(
        "{% extends \"default/post.html.j2\" %}", encoding="utf-8"
    )
    page = render_post(_post(), SITE, tmp_path)
    assert "<h1>My Post</h1>" in page


def test_site_layout_can_include_partials(tmp_path):
    (tmp_path / "footer.html.j2").write_text("footer:{{ site.title }}", encoding="utf-8")
    (tmp_path / "post.html.j2").write_text(
        "{{ title }}|{% include \"footer.html.j2\" %}", encoding="utf-8"
    )
    assert render_post(_post(), SITE, tmp_path) == "My Post|footer:Test Blog"


def test_index_lists_posts():
    page = render_index([_post()], SITE)
    assert '<a href="/posts/my-post/">My Post</a>' in page
    assert "2024-01-01" in page
