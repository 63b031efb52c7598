from __future__ import annotations

import re

from .domain import IngredientRef, RecipeTokens, TimerRef


INGREDIENT_RE = re.compile(r"@([^@{}]+)\{([^}]*)\}")
EQUIPMENT_RE = re.compile(r"#([^#@{}]+)\{([^}]*)\}")
TIMER_RE = re.compile(r"~\{([^}]+)\}")
QUANTITY_RE = re.compile(r"^([\d.-]+)%(.+)$")


def tokenize(raw: str) -> RecipeTokens:
    """Extract ingredient, cookware and timer references from Cooklang markup.

    Ingredients are keyed by exact name. A repeated ingredient keeps its first
    spec unless a later occurrence carries an amount the stored one lacks.
    """
    tokens = RecipeTokens()

    for match in INGREDIENT_RE.finditer(raw):
        name = match.group(1).strip()
        if not name:
            continue
        spec = match.group(2).strip()
        amount, unit = parse_quantity(spec)
        existing = tokens.ingredients.get(name)
        if existing is None or (amount and not existing.amount):
            tokens.ingredients[name] = IngredientRef(name=name, amount=amount, unit=unit, raw_spec=spec)

    for match in EQUIPMENT_RE.finditer(raw):
        name = match.group(1).strip()
        if name:
            tokens.equipment.add(name)

    for match in TIMER_RE.finditer(raw):
        tokens.timers.append(TimerRef(raw_spec=match.group(1).strip()))

    return tokens


def parse_quantity(spec: str) -> tuple[str | None, str | None]:
    if not spec:
        return None, None
    match = QUANTITY_RE.match(spec)
    if match:
        return match.group(1), match.group(2).strip()
    if spec[0].isdigit():
        return spec, None
    return None, None


def timer_text(spec: str) -> str:
    match = QUANTITY_RE.match(spec)
    if match:
        return f"{match.group(1)} {match.group(2).strip()}"
    return spec


def strip_markup(line: str) -> str:
    text = INGREDIENT_RE.sub(lambda m: m.group(1).strip(), line)
    text = EQUIPMENT_RE.sub(lambda m: m.group(1).strip(), text)
    text = TIMER_RE.sub(lambda m: timer_text(m.group(1).strip()), text)
    return text.strip()
