"""Pre-render hooks.

A hook is a plain callable taking one post. The build pipeline calls each
configured hook once per post, in list order, after the post's front matter
and body are loaded and before any HTML is produced. Hooks mutate the post
in place and return nothing.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from blogsite.sources.base import Post
from blogsite.text.titleize import titleize

logger = logging.getLogger(__name__)

PreRenderHook = Callable[[Post], None]


def titleize_title(post: Post, *, keep_id_suffix: bool = True) -> None:
    data = post["data"]
    if "title" not in data:
        return
    before = data["title"]
    data["title"] = titleize(before, keep_id_suffix=keep_id_suffix)
    if data["title"] != before:
        logger.debug("titleized %r -> %r", before, data["title"])


BUILTIN_HOOKS: Dict[str, Callable[..., None]] = {
    "titleize_title": titleize_title,
}


def resolve_hooks(
    names: Iterable[str],
    options: Optional[Mapping[str, Mapping]] = None,
) -> List[PreRenderHook]:
    """Look up hooks by name, binding any per-hook keyword options.

    `options` maps a hook name to keyword arguments, e.g.
    ``{"titleize_title": {"keep_id_suffix": False}}``.
    """
    options = options or {}
    hooks: List[PreRenderHook] = []
    for name in names:
        try:
            fn = BUILTIN_HOOKS[name]
        except KeyError:
            known = ", ".join(sorted(BUILTIN_HOOKS))
            raise ValueError(f"unknown pre-render hook {name!r} (known: {known})") from None
        kwargs = dict(options.get(name) or {})
        hooks.append(partial(fn, **kwargs) if kwargs else fn)
    return hooks


def run_hooks(post: Post, hooks: Iterable[PreRenderHook]) -> None:
    for hook in hooks:
        hook(post)
