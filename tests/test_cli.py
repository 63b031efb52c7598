from __future__ import annotations

import json
from pathlib import Path

import pytest

from cooksite import cli
from cooksite.errors import CooksiteError, WatchError


# Purpose: verify help is shown without a command.
def test_cli_no_command(capsys) -> None:
    assert cli.main([]) == 1
    assert "usage: cooksite" in capsys.readouterr().out


# Purpose: verify build writes the site and reports a summary.
def test_cli_build(site_copy: Path, temp_home: Path, capsys) -> None:
    assert cli.main(["build", "--project", str(site_copy)]) == 0
    out = capsys.readouterr().out
    assert f"Built 3 recipe(s) into {site_copy / 'dist'}" in out
    assert (site_copy / "dist" / "index.html").exists()


# Purpose: verify dry-run prints the planned pages.
def test_cli_build_dry_run(site_copy: Path, temp_home: Path, capsys) -> None:
    assert cli.main(["build", "--project", str(site_copy), "--dry-run", "--dist-dir", "public"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert str(site_copy / "public" / "index.html") in lines
    assert len(lines) == 9
    assert not (site_copy / "public").exists()


# Purpose: verify build warnings go to stderr.
def test_cli_build_warns_on_empty(tmp_path: Path, temp_home: Path, capsys) -> None:
    (tmp_path / "recipes").mkdir()
    assert cli.main(["build", "--project", str(tmp_path)]) == 0
    captured = capsys.readouterr()
    assert "no recipes found" in captured.err
    assert captured.out == ""


# Purpose: verify a missing recipes directory maps to exit code 3.
def test_cli_build_missing_recipes(tmp_path: Path, temp_home: Path, capsys) -> None:
    assert cli.main(["build", "--project", str(tmp_path)]) == 3
    assert "Recipes directory not found" in capsys.readouterr().err


# Purpose: verify format prints the Markdown report.
def test_cli_format(example_site: Path, tmp_path: Path, temp_home: Path, capsys) -> None:
    recipe = example_site / "recipes" / "tomato-soup.cook"
    assert cli.main(["format", str(recipe), "--project", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("## Ingredients\n- 1 onion\n")
    assert " 2. Add tomatoes and salt, then simmer for 20 minutes.\n    [tomatoes: 800 g; salt]" in out


# Purpose: verify format errors map to exit codes.
def test_cli_format_errors(example_site: Path, tmp_path: Path, temp_home: Path) -> None:
    assert cli.main(["format", str(tmp_path / "missing.cook"), "--project", str(tmp_path)]) == 3
    recipe = example_site / "recipes" / "tomato-soup.cook"
    args = ["format", str(recipe), "--project", str(tmp_path), "--renderer", "cookcli", "--cook", str(tmp_path / "nope")]
    assert cli.main(args) == 4
    assert cli.main(["format", str(recipe), "--project", str(tmp_path), "--wrap-width", "0"]) == 2


# Purpose: verify list output in plain and JSON form.
def test_cli_list(site_copy: Path, temp_home: Path, capsys) -> None:
    assert cli.main(["list", "--project", str(site_copy)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "pancakes: Fluffy Pancakes",
        "green_salad: Green Salad",
        "tomato-soup: Tomato Soup",
    ]
    assert cli.main(["list", "--project", str(site_copy), "--tag", "soup", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [item["slug"] for item in data] == ["tomato-soup"]
    assert data[0]["servings"] == 2


# Purpose: verify init creates a project skeleton and refuses to overwrite.
def test_cli_init(tmp_path: Path, temp_home: Path, capsys) -> None:
    target = tmp_path / "new-site"
    assert cli.main(["init", str(target)]) == 0
    for name in ("recipes", "templates", "assets"):
        assert (target / name).is_dir()
    config = (target / "cooksite.toml").read_text(encoding="utf-8")
    assert config == cli.PROJECT_CONFIG_TEMPLATE

    assert cli.main(["init", str(target)]) == 2
    assert "already exists" in capsys.readouterr().err
    assert cli.main(["init", str(target), "--force"]) == 0


# Purpose: verify config prints the merged settings.
def test_cli_config(site_copy: Path, temp_home: Path, capsys) -> None:
    assert cli.main(["config", "--project", str(site_copy), "--renderer", "cookcli"]) == 0
    out = capsys.readouterr().out
    assert "site_title = 'Example Kitchen'" in out
    assert "strategy = 'cookcli'" in out


# Purpose: verify watch delegates with the interval and maps interrupts.
def test_cli_watch(site_copy: Path, temp_home: Path, monkeypatch) -> None:
    calls = {}

    def fake_watch(cfg, interval_ms, verbose):
        calls["args"] = (cfg.project_dir, interval_ms, verbose)

    monkeypatch.setattr(cli, "watch_site", fake_watch)
    assert cli.main(["watch", "--project", str(site_copy), "--interval", "50", "--verbose"]) == 0
    assert calls["args"] == (str(site_copy), 50, True)

    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "watch_site", interrupted)
    assert cli.main(["watch", "--project", str(site_copy)]) == 130

    def failing(*args, **kwargs):
        raise WatchError("rebuild failed")

    monkeypatch.setattr(cli, "watch_site", failing)
    assert cli.main(["watch", "--project", str(site_copy)]) == 6


# Purpose: verify generic errors map to exit code 1.
def test_cli_generic_error(tmp_path: Path, temp_home: Path, monkeypatch) -> None:
    def boom(args):
        raise CooksiteError("generic")

    monkeypatch.setattr(cli, "_cmd_config", boom)
    assert cli.main(["config", "--project", str(tmp_path)]) == 1


# Purpose: verify argparse rejects unknown renderers.
def test_cli_rejects_unknown_renderer() -> None:
    with pytest.raises(SystemExit):
        cli.main(["build", "--renderer", "pandoc"])
