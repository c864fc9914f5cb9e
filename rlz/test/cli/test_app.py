from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rlz import __version__
from rlz.cli.app import app
from rlz.cli.context import WORKSPACE_ENV


@pytest.fixture(autouse=True)
def _restore_workspace_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # --workspace is forwarded through the environment; undo it after each test.
    monkeypatch.setenv(WORKSPACE_ENV, "")


def test_version() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_workspace_must_exist(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["--workspace", str(tmp_path / "missing"), "config", "check"])
    assert result.exit_code == 1


def test_config_check_in_workspace(tmp_path: Path) -> None:
    (tmp_path / "rlz.toml").write_text('[[package]]\nname = "a"\n', encoding="utf-8")

    result = CliRunner().invoke(app, ["--workspace", str(tmp_path), "config", "check"])

    assert result.exit_code == 0, result.output
    assert "1 package override(s)" in result.output


def test_repo_links_flags(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app,
        [
            "--workspace",
            str(tmp_path),
            "repo",
            "links",
            "--url",
            "git@github.com:Owner/Repo.git",
            "--prev",
            "v1.0.0",
            "--new",
            "v1.1.0",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "https://github.com/Owner/Repo/compare/v1.0.0...v1.1.0" in result.output
