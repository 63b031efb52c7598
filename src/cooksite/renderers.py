from __future__ import annotations

from pathlib import Path
import subprocess
import sys
from typing import Protocol

from .config import EffectiveConfig
from .cooklang import tokenize
from .errors import ConfigError, RendererError
from .formatter import DEFAULT_WIDTH, format_markdown
from .infra import run_process


class RenderStrategy(Protocol):
    name: str

    def render(self, path: Path, text: str) -> str: ...


class BuiltinRenderer:
    """Formats Cooklang in-process, reproducing the ``cook`` CLI Markdown layout."""

    name = "builtin"

    def __init__(self, width: int = DEFAULT_WIDTH) -> None:
        self.width = width

    def render(self, path: Path, text: str) -> str:
        return format_markdown(text, tokenize(text), width=self.width)


class CookCliRenderer:
    """Delegates to ``cook recipe read <path> --output-format markdown``."""

    name = "cookcli"

    def __init__(self, cook_path: str = "cook") -> None:
        self.cook_path = cook_path

    def render(self, path: Path, text: str) -> str:
        cmd = [self.cook_path, "recipe", "read", str(path), "--output-format", "markdown"]
        try:
            completed = run_process(cmd)
        except FileNotFoundError as exc:
            raise RendererError(f"{self.cook_path} not found") from exc
        except subprocess.CalledProcessError as exc:
            raise RendererError(f"Failed to convert {path} using CookCLI: {exc.stderr or exc.stdout}") from exc

        stderr = (completed.stderr or "").strip()
        if stderr and "warning" not in stderr:
            print(f"CookCLI warning for {path}: {stderr}", file=sys.stderr)
        return completed.stdout


def select_renderer(cfg: EffectiveConfig) -> RenderStrategy:
    strategy = cfg.renderer.strategy
    if strategy == "builtin":
        return BuiltinRenderer(width=cfg.renderer.wrap_width)
    if strategy == "cookcli":
        return CookCliRenderer(cook_path=cfg.renderer.cook_path)
    raise ConfigError(f"Unknown renderer strategy: {strategy!r}")
