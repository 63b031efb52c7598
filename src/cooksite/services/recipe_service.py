from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..domain import RecipeRecord, extract_frontmatter
from ..errors import MissingFileError
from ..recipe_parser import parse_recipe
from ..renderers import RenderStrategy


@dataclass
class ProcessResult:
    recipes: list[RecipeRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def scan_recipes(recipes_dir: Path) -> list[Path]:
    if not recipes_dir.is_dir():
        return []
    return sorted(path for path in recipes_dir.glob("*.cook") if path.is_file())


def read_cook_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingFileError(f"Recipe not readable: {path}") from exc
    except UnicodeDecodeError as exc:
        raise MissingFileError(f"Recipe is not valid UTF-8: {path}") from exc


def process_recipe(path: Path, renderer: RenderStrategy) -> RecipeRecord:
    text = read_cook_file(path)
    frontmatter = extract_frontmatter(text)
    markdown = renderer.render(path, text)
    return parse_recipe(markdown, frontmatter, path)


def process_recipes(recipes_dir: Path, renderer: RenderStrategy, verbose: bool = False) -> ProcessResult:
    """Process every ``.cook`` file; a failing recipe is reported and left out."""
    result = ProcessResult()
    if not recipes_dir.is_dir():
        result.warnings.append(f"Warning: recipes directory not found: {recipes_dir}")
        return result

    for path in scan_recipes(recipes_dir):
        if verbose:
            print(f"Processing: {path}")
        try:
            result.recipes.append(process_recipe(path, renderer))
        except Exception as exc:
            result.warnings.append(f"Error processing {path}: {exc}")
    return result
