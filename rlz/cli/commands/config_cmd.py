from __future__ import annotations

from pathlib import Path

import typer

from rlz.cli.commands._helpers import exit_on_error, load_workspace_config
from rlz.cli.context import CLIContext, build_context
from rlz.config import (
    PackageReleaseConfig,
    PackageUpdateConfig,
    dumps_config,
    fill_release_config,
    fill_update_config,
)
from rlz.config.loader import find_config
from rlz.core.errors import ErrorCode
from rlz.output.console import Style

config_app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Inspect the release configuration.",
)


@config_app.command("show")
def show(
    path: Path | None = typer.Option(None, "--path", help="Configuration file (default: rlz.toml)"),
    no_changelog: bool = typer.Option(False, "--no-changelog", help="Disable changelog updates."),
    allow_dirty: bool = typer.Option(False, "--allow-dirty", help="Publish from a dirty tree."),
    no_verify: bool = typer.Option(False, "--no-verify", help="Skip publish verification."),
) -> None:
    """Show the resolved configuration of every package."""
    ctx = build_context()
    config = load_workspace_config(ctx, path)

    update = fill_update_config(config, is_changelog_update_disabled=no_changelog)
    release = fill_release_config(config, allow_dirty=allow_dirty, no_verify=no_verify)

    timeout = exit_on_error(config.workspace.publish_timeout_duration(), ctx, ErrorCode.CONFIG_ERROR)
    ctx.console.print(f"publish timeout: {timeout}", Style.DIM)

    _print_package(
        ctx,
        "(default)",
        PackageUpdateConfig(generic=update.default),
        PackageReleaseConfig(generic=release.default),
    )
    for name in update.packages:
        _print_package(ctx, name, update.get_package_config(name), release.get_package_config(name))


@config_app.command("check")
def check(
    path: Path | None = typer.Option(None, "--path", help="Configuration file (default: rlz.toml)"),
) -> None:
    """Validate the configuration file."""
    ctx = build_context()
    if path is None and find_config(ctx.root) is None:
        ctx.console.warning(f"no configuration file in {ctx.root}, defaults apply")
    config = load_workspace_config(ctx, path)
    exit_on_error(config.workspace.publish_timeout_duration(), ctx, ErrorCode.CONFIG_ERROR)
    ctx.console.success(f"{len(config.package)} package override(s)")


@config_app.command("fmt")
def fmt(
    path: Path | None = typer.Option(None, "--path", help="Configuration file (default: rlz.toml)"),
) -> None:
    """Print the configuration in normalized form."""
    ctx = build_context()
    config = load_workspace_config(ctx, path)
    ctx.console.print(dumps_config(config).rstrip("\n"))


def _print_package(
    ctx: CLIContext,
    name: str,
    update: PackageUpdateConfig,
    release: PackageReleaseConfig,
) -> None:
    console = ctx.console
    rel = release.generic
    console.header(name)
    console.pair("release", rel.release)
    console.pair("semver_check", update.generic.semver_check)
    console.pair("changelog_update", update.generic.changelog_update)
    if update.changelog_path is not None:
        console.pair("changelog_path", update.changelog_path.as_posix())
    if update.changelog_include:
        console.pair("changelog_include", ", ".join(update.changelog_include))
    console.pair("publish", rel.publish.enabled)
    console.pair("publish_allow_dirty", rel.publish.allow_dirty)
    console.pair("publish_no_verify", rel.publish.no_verify)
    console.pair("git_tag", rel.git_tag.enabled)
    console.pair("git_release", rel.git_release.enabled)
    console.pair("git_release_draft", rel.git_release.draft)
    console.pair("git_release_type", rel.git_release.release_type.value)
