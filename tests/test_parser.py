from __future__ import annotations

from pathlib import Path

from cooksite.recipe_parser import filename_title, parse_recipe, recipe_filename, recipe_slug


REPORT = """## Ingredients
- 2 eggs
- 250 g flour

## Cookware
- bowl

## Steps
 1. Whisk flour and eggs in a bowl.
    [eggs: 2; flour: 250 g]
 2. Rest the batter.
    [–]"""


# Purpose: verify a formatted report is parsed into sections.
def test_parse_recipe_sections() -> None:
    recipe = parse_recipe(REPORT, {"title": "Batter", "tags": "Baking, quick"}, "recipes/batter.cook")
    assert recipe.filename == "batter"
    assert recipe.slug == "batter"
    assert recipe.url == "/recipe/batter.html"
    assert recipe.title == "Batter"
    assert recipe.tags == ["Baking", "Quick"]
    assert recipe.ingredients == ["2 eggs", "250 g flour"]
    assert recipe.equipment == ["bowl"]
    assert recipe.instructions == ["Whisk flour and eggs in a bowl.", "Rest the batter."]
    assert recipe.raw_markdown == REPORT


# Purpose: verify frontmatter fields map onto the record.
def test_parse_recipe_frontmatter_fields() -> None:
    frontmatter = {
        "title": "Soup",
        "category": "Dinner, soups",
        "servings": "4 bowls",
        "prep_time": "5 minutes",
        "cook time": "1 hour",
    }
    recipe = parse_recipe("", frontmatter, "soup.cook")
    assert recipe.categories == ["Dinner", "Soups"]
    assert recipe.servings == 4
    assert recipe.prep_time == "5 minutes"
    assert recipe.cook_time == "1 hour"


# Purpose: verify a metadata block in the report overrides frontmatter.
def test_parse_recipe_body_metadata_overrides() -> None:
    markdown = (
        "---\ntitle: Body Title\ntags: a, b\ncategories: x\nservings: 3 people\n"
        "prep_time: 1 min\ncooktime: 2 min\n---\n"
        "## Ingredients\n- 1 egg\n## Steps\n 1. Crack egg.\n    [egg: 1]"
    )
    recipe = parse_recipe(markdown, {"title": "Front", "tags": "z"}, "egg.cook")
    assert recipe.title == "Body Title"
    assert recipe.tags == ["A", "B"]
    assert recipe.categories == ["X"]
    assert recipe.servings == 3
    assert recipe.prep_time == "1 min"
    assert recipe.cook_time == "2 min"
    assert recipe.ingredients == ["1 egg"]
    assert recipe.instructions == ["Crack egg."]


# Purpose: verify the title falls back to the filename.
def test_parse_recipe_title_fallback() -> None:
    recipe = parse_recipe(REPORT, {}, Path("recipes") / "green_salad.cook")
    assert recipe.title == "Green Salad"
    assert recipe.slug == "green_salad"


# Purpose: verify zero or non-numeric servings are dropped.
def test_parse_recipe_servings_edge_cases() -> None:
    assert parse_recipe("", {"servings": "0"}, "a.cook").servings is None
    assert parse_recipe("", {"servings": "a few"}, "a.cook").servings is None


# Purpose: verify known metadata steps are dropped and other pairs are kept.
def test_parse_recipe_metadata_steps() -> None:
    markdown = "## Steps\n 1. author: Someone\n    [–]\n 2. difficulty: easy\n    [–]\n 3. Serve.\n    [–]"
    recipe = parse_recipe(markdown, {}, "a.cook")
    assert recipe.instructions == ["difficulty: easy", "Serve."]


# Purpose: verify wrapped step text is joined back together.
def test_parse_recipe_joins_continuations() -> None:
    markdown = "## Steps\n 1. Long line\n    continues here\n    [–]\n 2. Next\n    [–]"
    recipe = parse_recipe(markdown, {}, "a.cook")
    assert recipe.instructions == ["Long line continues here", "Next"]


# Purpose: verify unknown headers do not reset the current section.
def test_parse_recipe_ignores_other_headers() -> None:
    markdown = "## Instructions\n 1. A\n    [–]\n### Notes\n 2. B\n    [–]\n- bullet step"
    recipe = parse_recipe(markdown, {}, "a.cook")
    assert recipe.instructions == ["A", "B", "bullet step"]


# Purpose: verify list items are classified by unit substrings when no sections are found.
def test_parse_recipe_fallback_classification() -> None:
    markdown = "Intro\n- 2 eggs\n- Bake until golden\n1. Stir\n* Serve hot\n- 1 CUP rice"
    recipe = parse_recipe(markdown, {}, "a.cook")
    assert recipe.ingredients == ["2 eggs", "Bake until golden", "1 CUP rice"]
    assert recipe.instructions == ["Stir", "Serve hot"]


# Purpose: verify filename helpers.
def test_filename_helpers() -> None:
    assert recipe_filename("dir/Pancakes.cook") == "Pancakes"
    assert recipe_filename("notes.txt") == "notes.txt"
    assert recipe_slug("My  Recipe") == "my-recipe"
    assert filename_title("tomato-soup") == "Tomato Soup"
