from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..config import EffectiveConfig
from ..domain import RecipeRecord
from ..errors import MissingFileError
from ..paths import resolve_site_paths
from ..renderers import RenderStrategy, select_renderer
from .page_service import (
    copy_assets,
    generate_category_pages,
    generate_index_page,
    generate_recipe_page,
    generate_search_index,
    write_page,
)
from .recipe_service import process_recipes


@dataclass
class BuildResult:
    dist_dir: Path
    recipes: list[RecipeRecord] = field(default_factory=list)
    pages: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def build_site(
    cfg: EffectiveConfig,
    dry_run: bool = False,
    verbose: bool = False,
    renderer: RenderStrategy | None = None,
) -> BuildResult:
    paths = resolve_site_paths(cfg)
    if not paths.recipes_dir.is_dir():
        raise MissingFileError(f"Recipes directory not found: {paths.recipes_dir}")

    processed = process_recipes(paths.recipes_dir, renderer or select_renderer(cfg), verbose=verbose)
    result = BuildResult(dist_dir=paths.dist_dir, recipes=processed.recipes, warnings=list(processed.warnings))
    if not result.recipes:
        result.warnings.append(f"Warning: no recipes found in {paths.recipes_dir}")
        return result

    result.warnings.extend(_slug_collisions(result.recipes))
    if verbose:
        print(f"Found {len(result.recipes)} recipe(s)")

    def record(path: Path, content: str) -> None:
        if not dry_run:
            write_page(path, content)
        result.pages.append(path)

    for recipe in result.recipes:
        generate_recipe_page(recipe, paths, record, site_title=cfg.site_title)
    generate_index_page(result.recipes, paths, record, site_title=cfg.site_title)
    generate_category_pages(result.recipes, paths, record, site_title=cfg.site_title)
    generate_search_index(result.recipes, paths, record)

    if not dry_run:
        result.warnings.extend(copy_assets(paths))
    if verbose:
        print(f"Generated {len(result.pages)} file(s) in {paths.dist_dir}")
    return result


def _slug_collisions(recipes: list[RecipeRecord]) -> list[str]:
    seen: dict[str, str] = {}
    warnings: list[str] = []
    for recipe in recipes:
        previous = seen.get(recipe.slug)
        if previous is not None:
            warnings.append(
                f"Warning: {recipe.filename!r} and {previous!r} share slug {recipe.slug!r}; the later page wins"
            )
        seen[recipe.slug] = recipe.filename
    return warnings
