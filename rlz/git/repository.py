"""Git repository access.

Only what the release configuration needs from git is exposed: whether a path
is a repository and the URL of its ``origin`` remote.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rlz.core.result import Err, Ok, Result
from rlz.platform.process import ProcessError
from rlz.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working copy rooted at ``path``."""

    def __init__(self, path: Path, remote: str = "origin") -> None:
        self.path = path
        self.remote = remote

    def exists(self) -> bool:
        # .git is a file for worktrees and submodules
        return (self.path / ".git").exists()

    def original_remote_url(self) -> Result[str, GitError]:
        """URL of the configured remote, as written in the git config.

        Returns:
            Ok(url) on success
            Err(GitError) if git fails or the remote is not configured
        """
        key = f"remote.{self.remote}.url"
        result = self._run(["config", "--get", key])
        match result:
            case Err(e):
                # `git config --get` exits 1 when the key is unset
                message = e.stderr.strip() or f"no remote named '{self.remote}' is configured"
                return Err(GitError(command=f"config --get {key}", message=message, returncode=e.returncode))
            case Ok(stdout):
                url = stdout.strip()
                if not url:
                    return Err(
                        GitError(
                            command=f"config --get {key}",
                            message=f"remote '{self.remote}' has an empty url",
                        )
                    )
                return Ok(url)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS)
