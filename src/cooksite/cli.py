from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Callable
from pathlib import Path

from .config import EffectiveConfig, config_to_toml, resolve_config
from .errors import (
    ConfigError,
    CooksiteError,
    MissingFileError,
    RendererError,
    WatchError,
)
from .renderers import select_renderer
from .services.build_service import build_site
from .services.list_service import list_recipes
from .services.recipe_service import read_cook_file
from .watch import watch_site


PROJECT_CONFIG_TEMPLATE = """recipes_dir = "recipes"
dist_dir = "dist"
# templates_dir = "templates"
# assets_dir = "assets"
# site_title = "Recipe Collection"

[renderer]
# strategy = "builtin"  # or "cookcli"
# cook_path = "cook"
# wrap_width = 80
"""


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "build": _cmd_build,
        "format": _cmd_format,
        "list": _cmd_list,
        "watch": _cmd_watch,
        "init": _cmd_init,
        "config": _cmd_config,
    }

    handler = handlers.get(args.command)
    if handler is None:  # pragma: no cover
        return 1  # pragma: no cover

    try:
        return handler(args)
    except CooksiteError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pragma: no cover
        print(str(exc), file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project")
    common.add_argument("--recipes-dir")
    common.add_argument("--dist-dir")
    common.add_argument("--templates-dir")
    common.add_argument("--assets-dir")
    common.add_argument("--site-title")
    common.add_argument("--renderer", choices=("builtin", "cookcli"))
    common.add_argument("--cook", dest="cook_path")
    common.add_argument("--wrap-width", type=int)

    parser = argparse.ArgumentParser(prog="cooksite", description="Build a static site from Cooklang recipes.")
    sub = parser.add_subparsers(dest="command")

    build = sub.add_parser("build", parents=[common], help="Generate the site")
    build.add_argument("--dry-run", action="store_true")
    build.add_argument("--verbose", action="store_true")

    fmt = sub.add_parser("format", parents=[common], help="Print a recipe as cook-style Markdown")
    fmt.add_argument("recipe")

    listing = sub.add_parser("list", parents=[common], help="List recipes")
    listing.add_argument("--tag")
    listing.add_argument("--category")
    listing.add_argument("--json", action="store_true")

    watch = sub.add_parser("watch", parents=[common], help="Rebuild when recipes or templates change")
    watch.add_argument("--interval", type=int, default=500)
    watch.add_argument("--verbose", action="store_true")

    init = sub.add_parser("init", help="Create a project skeleton")
    init.add_argument("path", nargs="?", default=".")
    init.add_argument("--force", action="store_true")

    sub.add_parser("config", parents=[common], help="Show the effective configuration")

    return parser


def _cmd_build(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    result = build_site(cfg, dry_run=args.dry_run, verbose=args.verbose)
    for warning in result.warnings:
        print(warning, file=sys.stderr)
    if args.dry_run:
        for page in result.pages:
            print(page)
    elif result.recipes:
        print(f"Built {len(result.recipes)} recipe(s) into {result.dist_dir}")
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    path = Path(args.recipe)
    text = read_cook_file(path)
    print(select_renderer(cfg).render(path, text))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    recipes = list_recipes(cfg, args.tag, args.category)
    if args.json:
        print(json.dumps(recipes, indent=2, ensure_ascii=False))
    else:
        for rec in recipes:
            print(f"{rec.get('slug')}: {rec.get('title')}")
    return 0


def _cmd_watch(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    watch_site(cfg, interval_ms=args.interval, verbose=args.verbose)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    root = os.path.abspath(args.path)
    os.makedirs(root, exist_ok=True)
    _ensure_dir(root, "recipes")
    _ensure_dir(root, "templates")
    _ensure_dir(root, "assets")
    config_path = os.path.join(root, "cooksite.toml")
    if os.path.exists(config_path) and not args.force:
        raise ConfigError(f"{config_path} already exists (use --force to overwrite)")
    with open(config_path, "w", encoding="utf-8") as fh:
        fh.write(PROJECT_CONFIG_TEMPLATE)
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    print(config_to_toml(cfg))
    return 0


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    return resolve_config(_cli_args_dict(args))


def _ensure_dir(root: str, name: str) -> None:
    path = os.path.join(root, name)
    os.makedirs(path, exist_ok=True)


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _exit_code(exc: CooksiteError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, MissingFileError):
        return 3
    if isinstance(exc, RendererError):
        return 4
    if isinstance(exc, WatchError):
        return 6
    return 1
