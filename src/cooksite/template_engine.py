from __future__ import annotations

import html
import re
from typing import Any, Callable, Mapping, Union


EACH_OPEN = "{{#each"
EACH_CLOSE = "{{/each}}"
IF_OPEN = "{{#if"
IF_CLOSE = "{{/if}}"
ELSE_TAG = "{{else}}"
MAX_PASSES = 100

RAW_RE = re.compile(r"\{\{&(@?\w+)\}\}")
VAR_RE = re.compile(r"\{\{(@?\w+)\}\}")


class Context:
    """Immutable layered lookup: a key resolves in the overlay, then in the base."""

    __slots__ = ("_values", "_base")

    def __init__(self, values: Mapping[str, Any] | None = None, base: Context | None = None) -> None:
        self._values = dict(values or {})
        self._base = base

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]
        if self._base is not None:
            return self._base.get(key, default)
        return default

    def __contains__(self, key: str) -> bool:
        return key in self._values or (self._base is not None and key in self._base)

    def child(self, overlay: Mapping[str, Any]) -> Context:
        return Context(overlay, base=self)


TemplateData = Union[Mapping[str, Any], Context]


def render_template(template: str, data: TemplateData) -> str:
    """Render ``{{#each}}``, ``{{#if}}``, ``{{&raw}}`` and ``{{escaped}}`` directives, in that order."""
    context = data if isinstance(data, Context) else Context(data)

    result = _expand_blocks(template, context, EACH_OPEN, EACH_CLOSE, _render_each)
    result = _expand_blocks(result, context, IF_OPEN, IF_CLOSE, _render_if)
    result = RAW_RE.sub(lambda m: _to_text(context.get(m.group(1))), result)
    result = VAR_RE.sub(lambda m: _escaped(context.get(m.group(1))), result)
    return result


def is_truthy(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return value is not None and value is not False and value != ""


def find_matching_close(template: str, start: int, open_tag: str, close_tag: str) -> int:
    """Return the index of the close tag balancing an already-open block, or -1."""
    depth = 1
    pos = start
    while depth > 0 and pos < len(template):
        next_open = template.find(open_tag, pos)
        next_close = template.find(close_tag, pos)
        if next_close == -1:
            return -1
        if next_open != -1 and next_open < next_close:
            depth += 1
            pos = next_open + len(open_tag)
        else:
            depth -= 1
            if depth == 0:
                return next_close
            pos = next_close + len(close_tag)
    return -1


def find_block_else(body: str) -> int:
    """Return the index of the ``{{else}}`` owned by the outermost ``{{#if}}`` of *body*, or -1."""
    depth = 0
    pos = 0
    while pos < len(body):
        next_else = body.find(ELSE_TAG, pos)
        if next_else == -1:
            return -1
        next_open = body.find(IF_OPEN, pos)
        next_close = body.find(IF_CLOSE, pos)
        first = min(p for p in (next_open, next_else, next_close) if p != -1)
        if first == next_open:
            depth += 1
            pos = next_open + len(IF_OPEN)
        elif first == next_else:
            if depth == 0:
                return next_else
            pos = next_else + len(ELSE_TAG)
        else:
            depth -= 1
            pos = next_close + len(IF_CLOSE)
    return -1


BlockRenderer = Callable[[str, str, Context], str]


def _expand_blocks(template: str, context: Context, open_tag: str, close_tag: str, render: BlockRenderer) -> str:
    result = template
    for _ in range(MAX_PASSES):
        out: list[str] = []
        changed = False
        pos = 0
        while True:
            start = result.find(open_tag, pos)
            if start == -1:
                out.append(result[pos:])
                break
            out.append(result[pos:start])

            tag_end = result.find("}}", start)
            if tag_end == -1:
                out.append(result[start:])
                break
            key = result[start + len(open_tag) : tag_end].strip()

            close = find_matching_close(result, tag_end + 2, open_tag, close_tag)
            if close == -1:
                out.append(result[start:])
                break

            out.append(render(key, result[tag_end + 2 : close], context))
            changed = True
            pos = close + len(close_tag)

        result = "".join(out)
        if not changed:
            break
    return result


def _render_each(key: str, body: str, context: Context) -> str:
    items = context.get(key)
    if not isinstance(items, (list, tuple)):
        return ""

    parts: list[str] = []
    for index, item in enumerate(items, start=1):
        overlay: dict[str, Any] = dict(item) if isinstance(item, Mapping) else {}
        overlay["this"] = "" if item is None else item
        overlay["@index"] = index
        parts.append(render_template(body, context.child(overlay)))
    return "".join(parts)


def _render_if(key: str, body: str, context: Context) -> str:
    else_pos = find_block_else(body)
    if else_pos == -1:
        then_body, else_body = body, ""
    else:
        then_body, else_body = body[:else_pos], body[else_pos + len(ELSE_TAG) :]

    if is_truthy(context.get(key)):
        return render_template(then_body, context)
    if else_body:
        return render_template(else_body, context)
    return ""


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(item) for item in value)
    return str(value)


def _escaped(value: Any) -> str:
    if isinstance(value, (Mapping, list, tuple)):
        return ""
    return html.escape(_to_text(value), quote=True).replace("&#x27;", "&#039;")
