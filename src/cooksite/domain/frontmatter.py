from __future__ import annotations

import re
from typing import Any, Iterable, Union

import yaml


FRONTMATTER_RE = re.compile(r"^\ufeff?---\r?\n(.*?)\r?\n---", re.DOTALL)
META_LINE_RE = re.compile(r"^>>\s*([^:\n]+?)\s*:\s*(.+?)\s*$", re.MULTILINE)
KEY_VALUE_RE = re.compile(r"^([^:]+):\s*(.+)$")

FrontmatterMap = dict[str, Union[str, list[str]]]


def extract_frontmatter(text: str) -> FrontmatterMap:
    """Collect recipe metadata from a leading ``---`` block and ``>> key: value`` lines.

    Keys are lowercased. Keys containing whitespace are also stored with the
    whitespace replaced by underscores, so ``prep time`` and ``prep_time`` both
    resolve. Later entries overwrite earlier ones.
    """
    data: FrontmatterMap = {}
    match = FRONTMATTER_RE.match(text)
    if match:
        for key, value in _block_entries(match.group(1)):
            _store(data, key, value)
    for meta in META_LINE_RE.finditer(text):
        _store(data, meta.group(1), strip_quotes(meta.group(2)))
    return data


def _block_entries(block: str) -> list[tuple[str, Any]]:
    # BaseLoader keeps every scalar as written: "1:30" and "010" stay text
    try:
        loaded = yaml.load(block, Loader=yaml.BaseLoader)
    except yaml.YAMLError:
        loaded = None

    if not isinstance(loaded, dict):
        return _line_entries(block)

    entries: list[tuple[str, Any]] = []
    for key, value in loaded.items():
        if isinstance(value, list):
            entries.append((str(key), [item.strip() for item in value if isinstance(item, str) and item.strip()]))
        elif isinstance(value, str) and value.strip():
            entries.append((str(key), value.strip()))
    return entries


def _line_entries(block: str) -> list[tuple[str, Any]]:
    entries: list[tuple[str, Any]] = []
    for line in block.split("\n"):
        match = KEY_VALUE_RE.match(line.strip())
        if match:
            entries.append((match.group(1), strip_quotes(match.group(2).strip())))
    return entries


def _store(data: FrontmatterMap, key: str, value: Any) -> None:
    clean = key.strip().lower()
    if not clean:
        return
    data[clean] = value
    alias = re.sub(r"\s+", "_", clean)
    if alias != clean:
        data[alias] = value


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def split_labels(value: Any) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


def title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split())


def normalize_labels(labels: Iterable[str]) -> list[str]:
    seen: dict[str, str] = {}
    for label in labels:
        key = label.strip().lower()
        if key and key not in seen:
            seen[key] = title_case(label)
    return list(seen.values())
