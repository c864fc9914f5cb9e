from __future__ import annotations

from pathlib import Path

import pytest
import typer

from rlz.cli.context import CLIContext
from rlz.core.errors import ErrorCode
from rlz.output.console import MockConsole

CONFIG = """
[workspace]
changelog_update = true
publish_no_verify = false

[[package]]
name = "core"
changelog_update = true
publish = false
changelog_include = ["core-macros"]
"""


def _ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, content: str | None = CONFIG) -> MockConsole:
    import rlz.cli.commands.config_cmd as config_cmd

    if content is not None:
        (tmp_path / "rlz.toml").write_text(content, encoding="utf-8")
    console = MockConsole()
    monkeypatch.setattr(config_cmd, "build_context", lambda: CLIContext(root=tmp_path, console=console))
    return console


def _section(console: MockConsole, name: str) -> list[str]:
    messages = console.messages
    start = messages.index(name) + 1
    out: list[str] = []
    for m in messages[start:]:
        if not m.startswith("  "):
            break
        out.append(m.strip())
    return out


def test_show_resolves_packages(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch)

    config_cmd.show(path=None, no_changelog=False, allow_dirty=False, no_verify=False)

    assert "publish timeout: 0:30:00" in console.messages
    default = _section(console, "(default)")
    assert "changelog_update: True" in default
    assert "publish: True" in default
    core = _section(console, "core")
    assert "publish: False" in core
    assert "changelog_include: core-macros" in core
    assert "publish_no_verify: False" in core


def test_show_applies_force_flags(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch)

    config_cmd.show(path=None, no_changelog=True, allow_dirty=True, no_verify=True)

    for name in ("(default)", "core"):
        section = _section(console, name)
        assert "changelog_update: False" in section
        assert "publish_allow_dirty: True" in section
        assert "publish_no_verify: True" in section


def test_show_without_file_uses_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch, content=None)

    config_cmd.show(path=None, no_changelog=False, allow_dirty=False, no_verify=False)

    assert "release: True" in _section(console, "(default)")
    assert not console.has_error()


def test_check_ok(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch)

    config_cmd.check(path=None)

    assert console.messages == ["OK 1 package override(s)"]


def test_check_unknown_field_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch, content="[workspace]\npublsh = false\n")

    with pytest.raises(typer.Exit) as exc:
        config_cmd.check(path=None)

    assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)
    assert console.find("unknown field `publsh` in [workspace]")


def test_check_invalid_timeout_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch, content='[workspace]\npublish_timeout = "soon"\n')

    with pytest.raises(typer.Exit) as exc:
        config_cmd.check(path=None)

    assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)
    assert console.find("invalid publish_timeout soon")


def test_check_explicit_missing_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch, content=None)

    with pytest.raises(typer.Exit):
        config_cmd.check(path=tmp_path / "other.toml")

    assert console.has_error()


def test_fmt_prints_normalized_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import rlz.cli.commands.config_cmd as config_cmd

    console = _ctx(tmp_path, monkeypatch)

    config_cmd.fmt(path=None)

    text = console.text
    assert text.lstrip().startswith("[workspace]")
    assert 'name = "core"' in text
    assert "pr_draft = false" in text
