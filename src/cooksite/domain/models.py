from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IngredientRef:
    name: str
    amount: str | None
    unit: str | None
    raw_spec: str


@dataclass(frozen=True)
class TimerRef:
    raw_spec: str


@dataclass
class RecipeTokens:
    ingredients: dict[str, IngredientRef] = field(default_factory=dict)
    equipment: set[str] = field(default_factory=set)
    timers: list[TimerRef] = field(default_factory=list)


@dataclass(frozen=True)
class FormattedStep:
    index: int
    text: str
    annotations: list[str]


@dataclass
class RecipeRecord:
    filename: str
    slug: str
    title: str = ""
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    servings: int | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    raw_markdown: str = ""

    @property
    def url(self) -> str:
        return f"/recipe/{self.slug}.html"
