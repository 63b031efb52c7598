from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any

from .errors import ConfigError


RENDERER_STRATEGIES = ("builtin", "cookcli")


@dataclass(frozen=True)
class RendererConfig:
    strategy: str = "builtin"
    cook_path: str = "cook"
    wrap_width: int = 80


@dataclass(frozen=True)
class EffectiveConfig:
    project_dir: str
    recipes_dir: str
    dist_dir: str
    templates_dir: str
    assets_dir: str
    site_title: str
    renderer: RendererConfig


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/cooksite"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / "cooksite.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, project)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    project_dir = cli_args.get("project") or global_cfg.get("default_project") or os.getcwd()
    project_cfg = load_project_config(str(project_dir))

    merged = merge_config(_cli_to_dict(cli_args), project_cfg, global_cfg)
    renderer_cfg = merged.get("renderer", {})
    if not isinstance(renderer_cfg, dict):
        raise ConfigError("[renderer] must be a table")

    strategy = str(renderer_cfg.get("strategy", "builtin")).strip().lower()
    if strategy not in RENDERER_STRATEGIES:
        raise ConfigError(f"Unknown renderer strategy: {strategy!r} (expected one of {', '.join(RENDERER_STRATEGIES)})")

    return EffectiveConfig(
        project_dir=str(project_dir),
        recipes_dir=str(merged.get("recipes_dir", "recipes")),
        dist_dir=str(merged.get("dist_dir", "dist")),
        templates_dir=str(merged.get("templates_dir", "templates")),
        assets_dir=str(merged.get("assets_dir", "assets")),
        site_title=str(merged.get("site_title", "Recipe Collection")),
        renderer=RendererConfig(
            strategy=strategy,
            cook_path=str(renderer_cfg.get("cook_path", "cook")),
            wrap_width=_positive_int(renderer_cfg.get("wrap_width", 80), "wrap_width"),
        ),
    )


def _positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"{name} must be positive, got {number}")
    return number


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("recipes_dir", "dist_dir", "templates_dir", "assets_dir", "site_title"):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]

    renderer: dict[str, Any] = {}
    for cli_key, key in (("renderer", "strategy"), ("cook_path", "cook_path"), ("wrap_width", "wrap_width")):
        if cli_args.get(cli_key) is not None:
            renderer[key] = cli_args[cli_key]
    if renderer:
        out["renderer"] = renderer

    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"recipes_dir = {cfg.recipes_dir!r}",
        f"dist_dir = {cfg.dist_dir!r}",
        f"templates_dir = {cfg.templates_dir!r}",
        f"assets_dir = {cfg.assets_dir!r}",
        f"site_title = {cfg.site_title!r}",
        "",
        "[renderer]",
        f"strategy = {cfg.renderer.strategy!r}",
        f"cook_path = {cfg.renderer.cook_path!r}",
        f"wrap_width = {cfg.renderer.wrap_width}",
    ]
    return "\n".join(lines) + "\n"
