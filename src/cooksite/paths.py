from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import EffectiveConfig


PACKAGE_ROOT = Path(__file__).resolve().parent
BUNDLED_TEMPLATES_DIR = PACKAGE_ROOT / "site_templates"
BUNDLED_ASSETS_DIR = PACKAGE_ROOT / "site_assets"


@dataclass(frozen=True)
class SitePaths:
    root: Path
    recipes_dir: Path
    dist_dir: Path
    templates_dir: Path
    assets_dir: Path
    bundled_templates_dir: Path
    bundled_assets_dir: Path


def resolve_site_paths(cfg: EffectiveConfig) -> SitePaths:
    root = Path(cfg.project_dir)
    return SitePaths(
        root=root,
        recipes_dir=_resolve(root, cfg.recipes_dir),
        dist_dir=_resolve(root, cfg.dist_dir),
        templates_dir=_resolve(root, cfg.templates_dir),
        assets_dir=_resolve(root, cfg.assets_dir),
        bundled_templates_dir=BUNDLED_TEMPLATES_DIR,
        bundled_assets_dir=BUNDLED_ASSETS_DIR,
    )


def resolve_template_path(paths: SitePaths, name: str) -> Path:
    filename = f"{name}.html"
    candidate = paths.templates_dir / filename
    if candidate.exists():
        return candidate
    return paths.bundled_templates_dir / filename


def _resolve(root: Path, value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return root / path
