from __future__ import annotations

from pathlib import Path


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "cooksite"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def write_cook(recipes_dir: Path, name: str, content: str) -> Path:
    recipes_dir.mkdir(parents=True, exist_ok=True)
    path = recipes_dir / name
    path.write_text(content, encoding="utf-8")
    return path
