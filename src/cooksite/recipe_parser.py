from __future__ import annotations

from enum import Enum
from pathlib import Path
import re
from typing import Any, Mapping

from .domain import FRONTMATTER_RE, RecipeRecord, normalize_labels, split_labels, strip_quotes


HEADER_RE = re.compile(r"^#+\s*")
SECTION_RE = re.compile(
    r"^#+\s*(?:(?P<ingredients>ingredients?)|(?P<equipment>equipment|cookware)"
    r"|(?P<steps>steps?|instructions?|directions?))",
    re.IGNORECASE,
)
NUMBERED_RE = re.compile(r"^\d+[.)]\s*(.+)$")
LIST_ITEM_RE = re.compile(r"^(?:[-*]|\d+[.)])\s*")
BODY_META_RE = re.compile(r"^(\w+):\s*(.+)$")
METADATA_STEP_RE = re.compile(
    r"^(author|cook time|prep time|servings|course|cuisine|diet|source|tags|time required|title):\s*",
    re.IGNORECASE,
)
UNIT_KEYWORDS = ("cup", "tbsp", "tsp", "oz", "lb", "g", "kg", "ml", "l")


class Section(Enum):
    IDLE = "idle"
    INGREDIENTS = "ingredients"
    EQUIPMENT = "equipment"
    STEPS = "steps"


def parse_recipe(markdown: str, frontmatter: Mapping[str, Any], file_path: str | Path) -> RecipeRecord:
    """Rebuild a recipe record from formatted Markdown and its frontmatter.

    Frontmatter values are applied first; a ``---`` block at the top of the
    Markdown overrides them. Without such a block the title falls back to a
    title-cased filename.
    """
    filename = recipe_filename(file_path)
    recipe = RecipeRecord(filename=filename, slug=recipe_slug(filename), raw_markdown=markdown)
    _apply_frontmatter(recipe, frontmatter)

    match = FRONTMATTER_RE.match(markdown)
    if match:
        _apply_body_metadata(recipe, match.group(1))
        _parse_content(markdown[match.end() :].strip(), recipe)
    else:
        _parse_content(markdown, recipe)
        if not recipe.title:
            recipe.title = filename_title(filename)
    return recipe


def recipe_filename(file_path: str | Path) -> str:
    name = Path(file_path).name
    if name.endswith(".cook"):
        return name[: -len(".cook")]
    return name


def recipe_slug(filename: str) -> str:
    return re.sub(r"\s+", "-", filename.lower())


def filename_title(filename: str) -> str:
    text = re.sub(r"[-_]", " ", filename)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)


def _apply_frontmatter(recipe: RecipeRecord, frontmatter: Mapping[str, Any]) -> None:
    if frontmatter.get("title"):
        recipe.title = str(frontmatter["title"])
    if frontmatter.get("tags"):
        recipe.tags = normalize_labels(split_labels(frontmatter["tags"]))
    categories = frontmatter.get("categories") or frontmatter.get("category")
    if categories:
        recipe.categories = normalize_labels(split_labels(categories))
    if frontmatter.get("servings"):
        recipe.servings = _leading_int(frontmatter["servings"])
    prep = frontmatter.get("prep_time") or frontmatter.get("prep time")
    if prep:
        recipe.prep_time = str(prep)
    cook = frontmatter.get("cook_time") or frontmatter.get("cook time")
    if cook:
        recipe.cook_time = str(cook)


def _apply_body_metadata(recipe: RecipeRecord, block: str) -> None:
    for line in block.split("\n"):
        match = BODY_META_RE.match(line)
        if not match:
            continue
        key = match.group(1).lower()
        value = strip_quotes(match.group(2))
        if key == "title":
            recipe.title = value
        elif key == "tags":
            recipe.tags = normalize_labels(split_labels(value))
        elif key in ("categories", "category"):
            recipe.categories = normalize_labels(split_labels(value))
        elif key == "servings":
            recipe.servings = _leading_int(value)
        elif key in ("prep_time", "preptime"):
            recipe.prep_time = value
        elif key in ("cook_time", "cooktime"):
            recipe.cook_time = value


def _leading_int(value: Any) -> int | None:
    match = re.match(r"^\s*([+-]?\d+)", str(value))
    if not match:
        return None
    return int(match.group(1)) or None


def _section_for(line: str) -> Section | None:
    match = SECTION_RE.match(line)
    if not match:
        return None
    if match.group("ingredients"):
        return Section.INGREDIENTS
    if match.group("equipment"):
        return Section.EQUIPMENT
    return Section.STEPS


class _ContentParser:
    def __init__(self, recipe: RecipeRecord) -> None:
        self.recipe = recipe
        self.section = Section.IDLE
        self.step: list[str] | None = None

    def feed(self, line: str) -> None:
        trimmed = line.strip()
        section = _section_for(trimmed)
        if section is not None:
            self.flush()
            self.section = section
            return
        if not trimmed or HEADER_RE.match(trimmed):
            return

        if self.section is Section.INGREDIENTS:
            self._ingredient(trimmed)
        elif self.section is Section.EQUIPMENT:
            self._equipment(trimmed)
        elif self.section is Section.STEPS:
            self._step(trimmed)

    def flush(self) -> None:
        if self.step:
            text = " ".join(self.step).strip()
            if text:
                self.recipe.instructions.append(text)
        self.step = None

    def _ingredient(self, line: str) -> None:
        if line.startswith(("-", "*")):
            item = line[1:].strip()
            if item:
                self.recipe.ingredients.append(item)
        elif not line.startswith("["):
            self.recipe.ingredients.append(line)

    def _equipment(self, line: str) -> None:
        if line.startswith(("-", "*")):
            item = line[1:].strip()
            if item:
                self.recipe.equipment.append(item)
        else:
            self.recipe.equipment.append(line)

    def _step(self, line: str) -> None:
        if line.startswith("["):
            self.flush()
            return

        numbered = NUMBERED_RE.match(line)
        if numbered:
            self.flush()
            text = numbered.group(1).strip()
            # flat "key: value" metadata rendered as a step by the cook CLI
            if METADATA_STEP_RE.match(text):
                return
            self.step = [text]
        elif self.step is not None:
            self.step.append(line)
        elif line.startswith(("-", "*")):
            item = line[1:].strip()
            if item:
                self.recipe.instructions.append(item)


def _parse_content(content: str, recipe: RecipeRecord) -> None:
    lines = content.split("\n")
    parser = _ContentParser(recipe)
    for line in lines:
        parser.feed(line)
    parser.flush()

    if recipe.ingredients or recipe.instructions:
        return

    for line in lines:
        trimmed = line.strip()
        if not LIST_ITEM_RE.match(trimmed):
            continue
        item = LIST_ITEM_RE.sub("", trimmed, count=1)
        if any(word in item.lower() for word in UNIT_KEYWORDS):
            recipe.ingredients.append(item)
        else:
            recipe.instructions.append(item)
