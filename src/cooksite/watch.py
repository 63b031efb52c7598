from __future__ import annotations

from pathlib import Path
import sys
import time

from .config import EffectiveConfig
from .errors import MissingFileError, WatchError
from .paths import SitePaths, resolve_site_paths
from .services.build_service import build_site


def watch_site(
    cfg: EffectiveConfig,
    interval_ms: int,
    verbose: bool,
    max_cycles: int | None = None,
) -> None:
    paths = resolve_site_paths(cfg)
    if not paths.recipes_dir.is_dir():
        raise MissingFileError(f"Recipes directory not found: {paths.recipes_dir}")

    mtimes = _snapshot_mtimes(_collect_watch_paths(paths))
    cycles = 0

    while True:
        time.sleep(interval_ms / 1000.0)
        watched = _collect_watch_paths(paths)
        if _changed(mtimes, watched):
            try:
                result = build_site(cfg, verbose=verbose)
            except Exception as exc:
                raise WatchError(str(exc)) from exc
            for warning in result.warnings:
                print(warning, file=sys.stderr)
            if verbose:
                print(f"Rebuilt {len(result.recipes)} recipe(s)")
            mtimes = _snapshot_mtimes(_collect_watch_paths(paths))

        cycles += 1
        if max_cycles is not None and cycles >= max_cycles:
            break


def _collect_watch_paths(paths: SitePaths) -> list[Path]:
    watched: set[Path] = set(paths.recipes_dir.glob("*.cook"))
    if paths.templates_dir.is_dir():
        watched.update(paths.templates_dir.glob("*.html"))
    if paths.assets_dir.is_dir():
        watched.update(path for path in paths.assets_dir.iterdir() if path.is_file())
    return sorted(watched)


def _snapshot_mtimes(paths: list[Path]) -> dict[Path, float]:
    mtimes: dict[Path, float] = {}
    for path in paths:
        mtimes[path] = path.stat().st_mtime
    return mtimes


def _changed(mtimes: dict[Path, float], watched: list[Path]) -> bool:
    if set(watched) != set(mtimes):
        return True
    for path, old in mtimes.items():
        if not path.exists():
            return True
        if path.stat().st_mtime != old:
            return True
    return False
