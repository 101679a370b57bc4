#!/usr/bin/env python3
import argparse
import logging
from pathlib import Path

import yaml

from blogsite.build.pipeline import BuildError, build_site
from blogsite.sources.base import PostError
from blogsite.sources.posts import load_posts
from blogsite.text.titleize import titleize
from blogsite.util.config import load_config


def _cmd_build(args) -> int:
    overrides = {"source": args.source, "destination": args.destination}
    if args.keep_id_suffix is not None:
        overrides["titleize"] = {"keep_id_suffix": bool(args.keep_id_suffix)}
    if args.no_titleize:
        overrides["hooks"] = {"pre_render": []}
    try:
        cfg = load_config(Path(args.config), overrides)
        result = build_site(cfg)
    except (BuildError, PostError, ValueError, yaml.YAMLError) as e:
        print(f"[blogsite] Build failed: {e}")
        return 1

    print(f"[blogsite] Built {len(result.posts)} posts into {cfg['destination_path']}")
    for path in result.written:
        print(f"  - {path}")
    return 0


def _cmd_titleize(args) -> int:
    print(titleize(" ".join(args.text), keep_id_suffix=args.keep_id_suffix))
    return 0


def _cmd_posts(args) -> int:
    try:
        cfg = load_config(Path(args.config), {"source": args.source})
        posts = load_posts(cfg["posts_path"])
    except (PostError, ValueError, yaml.YAMLError) as e:
        print(f"[blogsite] {e}")
        return 1
    for p in posts:
        print(f"{p['date'].date().isoformat()}  {p['slug']}  {p['data'].get('title', '')}")
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="blogsite", description="Static blog builder")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="render posts into the destination directory")
    b.add_argument("--config", default="_config.yml")
    b.add_argument("--source", default=None, help="override site source directory")
    b.add_argument("--destination", default=None, help="override output directory")
    b.add_argument("--no-titleize", action="store_true", help="skip all pre-render hooks")
    b.add_argument("--keep-id-suffix", dest="keep_id_suffix", action=argparse.BooleanOptionalAction, default=None,
                   help="keep a trailing version/acronym token verbatim when title-casing")
    b.set_defaults(func=_cmd_build)

    t = sub.add_parser("titleize", help="print the title-cased form of TEXT")
    t.add_argument("text", nargs="+")
    t.add_argument("--keep-id-suffix", dest="keep_id_suffix", action=argparse.BooleanOptionalAction, default=True)
    t.set_defaults(func=_cmd_titleize)

    p = sub.add_parser("posts", help="list posts that would be built")
    p.add_argument("--config", default="_config.yml")
    p.add_argument("--source", default=None)
    p.set_defaults(func=_cmd_posts)

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
