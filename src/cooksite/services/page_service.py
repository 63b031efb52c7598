from __future__ import annotations

from dataclasses import asdict
import json
from pathlib import Path
import re
import shutil
from typing import Any, Callable, Iterable

from ..domain import RecipeRecord, title_case
from ..errors import MissingFileError
from ..paths import SitePaths, resolve_template_path
from ..template_engine import render_template


PageWriter = Callable[[Path, str], None]
CARD_TAG_LIMIT = 3


def write_page(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def load_template(name: str, paths: SitePaths) -> str:
    path = resolve_template_path(paths, name)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingFileError(f"Template not found: {path}") from exc


def generate_recipe_page(
    recipe: RecipeRecord,
    paths: SitePaths,
    write: PageWriter = write_page,
    site_title: str = "Recipe Collection",
) -> str:
    content = render_template(load_template("recipe", paths), _recipe_context(recipe))
    page = _wrap(paths, recipe.title, content, site_title)
    write(paths.dist_dir / "recipe" / f"{recipe.slug}.html", page)
    return recipe.url


def generate_index_page(
    recipes: list[RecipeRecord],
    paths: SitePaths,
    write: PageWriter = write_page,
    site_title: str = "Recipe Collection",
) -> None:
    categories = collect_labels(cat for recipe in recipes for cat in recipe.categories)
    tags = collect_labels(tag for recipe in recipes for tag in recipe.tags)

    context = {
        "site_title": site_title,
        "recipes": [_card(recipe) for recipe in recipes],
        "recipe_count": len(recipes),
        "categories": label_links(sorted(categories.values())),
        "tags": label_links(sorted(tags.values())),
        "recipe_data": _script_json(
            [
                {
                    "title": recipe.title,
                    "slug": recipe.slug,
                    "tags": recipe.tags,
                    "categories": recipe.categories,
                    "url": recipe.url,
                }
                for recipe in recipes
            ]
        ),
    }
    content = render_template(load_template("index", paths), context)
    write(paths.dist_dir / "index.html", _wrap(paths, site_title, content, site_title))


def generate_category_pages(
    recipes: list[RecipeRecord],
    paths: SitePaths,
    write: PageWriter = write_page,
    site_title: str = "Recipe Collection",
) -> list[str]:
    """Write one page per distinct category or tag, keyed case-insensitively."""
    groups: dict[str, dict[str, Any]] = {}
    for recipe in recipes:
        for label in [*recipe.categories, *recipe.tags]:
            key = label.strip().lower()
            if not key:
                continue
            group = groups.setdefault(key, {"name": title_case(label), "recipes": []})
            if not any(member is recipe for member in group["recipes"]):
                group["recipes"].append(recipe)

    template = load_template("category", paths)
    urls: list[str] = []
    for key, group in groups.items():
        members: list[RecipeRecord] = group["recipes"]
        content = render_template(
            template,
            {
                "category_name": group["name"],
                "recipe_count": len(members),
                "multiple": len(members) != 1,
                "recipes": [_card(recipe) for recipe in members],
            },
        )
        slug = slugify(key)
        write(
            paths.dist_dir / "category" / f"{slug}.html",
            _wrap(paths, f"{group['name']} - {site_title}", content, site_title),
        )
        urls.append(f"/category/{slug}.html")
    return urls


def generate_search_index(recipes: list[RecipeRecord], paths: SitePaths, write: PageWriter = write_page) -> None:
    entries = [
        {
            "title": recipe.title,
            "slug": recipe.slug,
            "url": recipe.url,
            "tags": recipe.tags,
            "categories": recipe.categories,
            "ingredients": recipe.ingredients,
            "search_text": " ".join([recipe.title, *recipe.tags, *recipe.categories, *recipe.ingredients]).lower(),
        }
        for recipe in recipes
    ]
    write(paths.dist_dir / "search-index.json", json.dumps(entries, indent=2, ensure_ascii=False))


def copy_assets(paths: SitePaths) -> list[str]:
    """Copy bundled then project assets into ``<dist>/assets`` and ``<dist>``."""
    warnings: list[str] = []
    targets = [paths.dist_dir / "assets", paths.dist_dir]
    for source_dir in (paths.bundled_assets_dir, paths.assets_dir):
        if not source_dir.is_dir():
            continue
        for source in sorted(source_dir.iterdir()):
            if not source.is_file():
                continue
            for target_dir in targets:
                try:
                    target_dir.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(source, target_dir / source.name)
                except OSError as exc:
                    warnings.append(f"Warning: could not copy asset {source}: {exc}")
    return warnings


def collect_labels(labels: Iterable[str]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for label in labels:
        key = label.strip().lower()
        if key and key not in collected:
            collected[key] = title_case(label)
    return collected


def label_links(labels: Iterable[str]) -> list[dict[str, str]]:
    return [{"name": label, "slug": slugify(label.strip().lower())} for label in labels]


def slugify(text: str) -> str:
    slug = str(text).lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    slug = slug.strip("-")
    return slug or "item"


def _recipe_context(recipe: RecipeRecord) -> dict[str, Any]:
    data = asdict(recipe)
    data["url"] = recipe.url
    data["tags"] = label_links(recipe.tags)
    data["categories"] = label_links(recipe.categories)
    return data


def _card(recipe: RecipeRecord) -> dict[str, Any]:
    return {
        "title": recipe.title,
        "slug": recipe.slug,
        "url": recipe.url,
        "tags": recipe.tags[:CARD_TAG_LIMIT],
        "servings": recipe.servings,
    }


def _wrap(paths: SitePaths, title: str, content: str, site_title: str) -> str:
    return render_template(
        load_template("base", paths),
        {"title": title, "site_title": site_title, "content": content},
    )


def _script_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")
