from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Optional

import yaml

from blogsite.util.paths import resolve_dir

logger = logging.getLogger(__name__)

DEFAULTS = {
    "title": "My Blog",
    "description": "",
    "url": "",
    "baseurl": "",
    "source": ".",
    "posts_dir": "_posts",
    "layouts_dir": "_layouts",
    "destination": "_site",
    "permalink": "/posts/:title/",
    "excerpt_length": 200,
    "hooks": {"pre_render": ["titleize_title"]},
    "titleize": {"keep_id_suffix": True},
}


def _merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(config_path: Optional[Path], overrides: Optional[dict] = None) -> dict:
    """Load `_config.yml` and merge: defaults <- file <- overrides.

    Adds resolved absolute paths under the keys ``source_path``,
    ``posts_path``, ``layouts_path`` and ``destination_path``. Relative
    paths resolve against the config file's directory.
    """
    cfg = copy.deepcopy(DEFAULTS)
    root = Path.cwd()
    if config_path is not None:
        config_path = Path(config_path)
        root = config_path.resolve().parent
        if config_path.exists():
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"{config_path}: config must be a mapping")
            cfg = _merge(cfg, loaded)
        else:
            logger.info("config %s not found; using defaults", config_path)
    cfg = _merge(cfg, {k: v for k, v in (overrides or {}).items() if v is not None})

    source = resolve_dir(cfg["source"], root)
    cfg["source_path"] = source
    cfg["posts_path"] = resolve_dir(cfg["posts_dir"], source)
    cfg["layouts_path"] = resolve_dir(cfg["layouts_dir"], source)
    cfg["destination_path"] = resolve_dir(cfg["destination"], source)
    return cfg
