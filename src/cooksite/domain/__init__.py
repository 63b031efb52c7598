from .frontmatter import (
    FRONTMATTER_RE,
    FrontmatterMap,
    extract_frontmatter,
    normalize_labels,
    split_labels,
    strip_quotes,
    title_case,
)
from .models import FormattedStep, IngredientRef, RecipeRecord, RecipeTokens, TimerRef

__all__ = [
    "FRONTMATTER_RE",
    "FormattedStep",
    "FrontmatterMap",
    "IngredientRef",
    "RecipeRecord",
    "RecipeTokens",
    "TimerRef",
    "extract_frontmatter",
    "normalize_labels",
    "split_labels",
    "strip_quotes",
    "title_case",
]
