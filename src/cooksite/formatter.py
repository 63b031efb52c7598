from __future__ import annotations

import re

from .cooklang import strip_markup, tokenize
from .domain import FRONTMATTER_RE, FormattedStep, IngredientRef, RecipeTokens


DEFAULT_WIDTH = 80
CONTINUATION = "\n    "
NO_INGREDIENTS = "[–]"


def format_markdown(raw: str, tokens: RecipeTokens | None = None, width: int = DEFAULT_WIDTH) -> str:
    """Render Cooklang markup as the ``cook recipe read --output-format markdown`` report."""
    if tokens is None:
        tokens = tokenize(raw)

    out: list[str] = []

    if tokens.ingredients:
        lines = sorted(ingredient_line(ref) for ref in tokens.ingredients.values())
        out.append("## Ingredients\n" + "\n".join(lines) + "\n\n")

    if tokens.equipment:
        lines = [f"- {name}" for name in sorted(tokens.equipment)]
        out.append("## Cookware\n" + "\n".join(lines) + "\n\n")

    steps = build_steps(raw, tokens)
    if steps:
        out.append("## Steps\n")
        for step in steps:
            marker = f"[{'; '.join(step.annotations)}]" if step.annotations else NO_INGREDIENTS
            out.append(f" {step.index}. {wrap_step_text(step.text, width)}{CONTINUATION}{marker}\n")

    return "".join(out).strip()


def build_steps(raw: str, tokens: RecipeTokens) -> list[FormattedStep]:
    match = FRONTMATTER_RE.match(raw)
    body = raw[match.end() :] if match else raw

    patterns = [
        (re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE), ref) for name, ref in tokens.ingredients.items()
    ]

    steps: list[FormattedStep] = []
    for line in body.strip().split("\n"):
        if not line.strip() or line.lstrip().startswith(">>"):
            continue
        text = strip_markup(line)
        if not text:
            continue
        annotations = [annotation(ref) for pattern, ref in patterns if pattern.search(text)]
        steps.append(FormattedStep(index=len(steps) + 1, text=text, annotations=annotations))
    return steps


def ingredient_line(ref: IngredientRef) -> str:
    if ref.amount and ref.unit:
        return f"- {ref.amount} {ref.unit} {ref.name}"
    if ref.amount:
        return f"- {ref.amount} {ref.name}"
    if ref.raw_spec:
        return f"- {ref.name} ({ref.raw_spec})"
    return f"- {ref.name}"


def annotation(ref: IngredientRef) -> str:
    if ref.amount and ref.unit:
        return f"{ref.name}: {ref.amount} {ref.unit}"
    if ref.amount:
        return f"{ref.name}: {ref.amount}"
    return ref.name


def wrap_step_text(text: str, width: int = DEFAULT_WIDTH) -> str:
    if len(text) <= width:
        return text

    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        if len(f"{current} {word}") <= width:
            current = f"{current} {word}" if current else word
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return CONTINUATION.join(lines)
