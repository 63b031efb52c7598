from __future__ import annotations

from pathlib import Path
import shutil
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture()
def example_site() -> Path:
    return ROOT / "fixtures" / "SiteExample"


@pytest.fixture()
def site_copy(example_site: Path, tmp_path: Path) -> Path:
    target = tmp_path / "site"
    shutil.copytree(example_site, target)
    return target


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
