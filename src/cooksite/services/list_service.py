from __future__ import annotations

import sys
from typing import Any

from ..config import EffectiveConfig
from ..paths import resolve_site_paths
from ..renderers import select_renderer
from .recipe_service import process_recipes


def list_recipes(cfg: EffectiveConfig, tag: str | None, category: str | None) -> list[dict[str, Any]]:
    paths = resolve_site_paths(cfg)
    recipes: list[dict[str, Any]] = []
    if not paths.recipes_dir.exists():
        return recipes

    processed = process_recipes(paths.recipes_dir, select_renderer(cfg))
    for warning in processed.warnings:
        print(warning, file=sys.stderr)

    for recipe in processed.recipes:
        if tag and tag.strip().lower() not in {item.lower() for item in recipe.tags}:
            continue
        if category and category.strip().lower() not in {item.lower() for item in recipe.categories}:
            continue
        recipes.append(
            {
                "slug": recipe.slug,
                "title": recipe.title,
                "url": recipe.url,
                "tags": recipe.tags,
                "categories": recipe.categories,
                "servings": recipe.servings,
            }
        )
    recipes.sort(key=lambda item: item["title"].lower())
    return recipes
