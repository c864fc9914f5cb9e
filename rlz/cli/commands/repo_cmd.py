from __future__ import annotations

from pathlib import Path

import typer

from rlz.cli.commands._helpers import exit_on_error, load_workspace_config
from rlz.cli.context import CLIContext, build_context
from rlz.core.errors import ErrorCode
from rlz.core.result import Result
from rlz.git import Repository, RepoUrl, RepoUrlError
from rlz.output.console import Style

repo_app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Inspect the hosting repository.",
)


@repo_app.command("links")
def links(
    url: str | None = typer.Option(None, "--url", help="Remote URL (default: repo_url, then origin)"),
    prev_tag: str | None = typer.Option(None, "--prev", help="Previous tag of the release link."),
    new_tag: str | None = typer.Option(None, "--new", help="New tag of the release link."),
    path: Path | None = typer.Option(None, "--path", help="Configuration file (default: rlz.toml)"),
) -> None:
    """Show the links built from the repository URL."""
    ctx = build_context()
    repo_url = exit_on_error(_resolve_repo_url(ctx, url, path), ctx, ErrorCode.GIT_ERROR)

    console = ctx.console
    console.header(f"{repo_url.owner}/{repo_url.name}")
    console.pair("host", repo_url.host if repo_url.port is None else f"{repo_url.host}:{repo_url.port}")
    console.pair("hosting", "github" if repo_url.is_on_github() else "gitea")
    console.pair("pull requests", repo_url.git_pr_link())
    console.pair("api", repo_url.gitea_api_url())
    if new_tag is not None:
        console.pair("release", repo_url.git_release_link(prev_tag or new_tag, new_tag))
    elif prev_tag is not None:
        console.print("hint: --prev needs --new", Style.DIM)


def _resolve_repo_url(ctx: CLIContext, url: str | None, path: Path | None) -> Result[RepoUrl, RepoUrlError]:
    if url is not None:
        return RepoUrl.parse(url)

    config = load_workspace_config(ctx, path)
    if config.workspace.repo_url is not None:
        return RepoUrl.parse(config.workspace.repo_url)

    ctx.console.print(f"using origin remote of {ctx.root}", Style.DIM)
    return RepoUrl.from_repository(Repository(ctx.root))
