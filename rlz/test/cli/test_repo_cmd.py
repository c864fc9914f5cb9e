from __future__ import annotations

from pathlib import Path

import pytest
import typer

from rlz.cli.context import CLIContext
from rlz.core.errors import ErrorCode
from rlz.core.result import Err, Ok, Result
from rlz.git.repository import GitError
from rlz.output.console import MockConsole


def _ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import rlz.cli.commands.repo_cmd as repo_cmd

    console = MockConsole()
    monkeypatch.setattr(repo_cmd, "build_context", lambda: CLIContext(root=tmp_path, console=console))
    return console


def _patch_origin(monkeypatch: pytest.MonkeyPatch, result: Result[str, GitError]) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    class FakeRepository:
        def __init__(self, path: Path) -> None:
            self.path = path

        def original_remote_url(self) -> Result[str, GitError]:
            return result

    monkeypatch.setattr(repo_cmd, "Repository", FakeRepository)


def test_links_for_explicit_github_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    console = _ctx(tmp_path, monkeypatch)

    repo_cmd.links(url="https://github.com/Owner/Repo", prev_tag="v0.1.0", new_tag="v0.2.0", path=None)

    assert console.messages[0] == "Owner/Repo"
    assert "  hosting: github" in console.messages
    assert "  pull requests: https://github.com/Owner/Repo/pull" in console.messages
    assert "  release: https://github.com/Owner/Repo/compare/v0.1.0...v0.2.0" in console.messages


def test_first_release_link(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    console = _ctx(tmp_path, monkeypatch)

    repo_cmd.links(url="https://github.com/Owner/Repo", prev_tag=None, new_tag="v0.0.1", path=None)

    assert "  release: https://github.com/Owner/Repo/releases/tag/v0.0.1" in console.messages


def test_links_use_config_repo_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    (tmp_path / "rlz.toml").write_text(
        '[workspace]\nrepo_url = "http://gitea.local:3000/team/app"\n',
        encoding="utf-8",
    )
    console = _ctx(tmp_path, monkeypatch)

    repo_cmd.links(url=None, prev_tag=None, new_tag=None, path=None)

    assert "  hosting: gitea" in console.messages
    assert "  host: gitea.local:3000" in console.messages
    assert "  pull requests: https://gitea.local/team/app/pulls" in console.messages
    assert "  api: http://gitea.local:3000/api/v1/" in console.messages


def test_links_fall_back_to_origin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    console = _ctx(tmp_path, monkeypatch)
    _patch_origin(monkeypatch, Ok("git@github.com:Owner/Repo.git"))

    repo_cmd.links(url=None, prev_tag=None, new_tag=None, path=None)

    assert console.find("using origin remote")
    assert "Owner/Repo" in console.messages


def test_links_without_origin_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    console = _ctx(tmp_path, monkeypatch)
    _patch_origin(monkeypatch, Err(GitError(command="config", message="no remote named 'origin'")))

    with pytest.raises(typer.Exit) as exc:
        repo_cmd.links(url=None, prev_tag=None, new_tag=None, path=None)

    assert exc.value.exit_code == int(ErrorCode.GIT_ERROR)
    assert console.find("error: cannot determine origin url")
    assert console.find("hint: no remote named 'origin'")


def test_links_invalid_url_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.repo_cmd as repo_cmd

    console = _ctx(tmp_path, monkeypatch)

    with pytest.raises(typer.Exit):
        repo_cmd.links(url="https://github.com/Repo", prev_tag=None, new_tag=None, path=None)

    assert console.find("cannot find owner in git url https://github.com/Repo")
