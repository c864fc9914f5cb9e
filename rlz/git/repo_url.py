"""Repository URL model.

A ``RepoUrl`` is parsed once from a git remote and builds the links used in
changelogs and release PRs. GitHub and Gitea differ in two places:

- pull request listing: ``/pull`` on GitHub, ``/pulls`` on Gitea
- REST API: Gitea serves it under ``/api/v1/`` on the repository host

Release, compare and PR links are always ``https://``. Only the Gitea API base
uses the scheme and port of the parsed remote.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Protocol
from urllib.parse import urlsplit

from rlz.core.result import Err, Ok, Result

__all__ = ["RemoteRepository", "RepoUrl", "RepoUrlError"]

RepoUrlErrorKind = Literal["invalid_url", "missing_owner", "missing_host", "missing_origin"]

# user@host:path, without the "://" of URL-style remotes.
_SCP_RE = re.compile(r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^@/:]+):(?P<path>(?!//).+)$")
_WINDOWS_DRIVE_RE = re.compile(r"^[a-zA-Z]:[\\/]")


@dataclass(frozen=True, slots=True)
class RepoUrlError:
    kind: RepoUrlErrorKind
    message: str
    hint: str | None = None


class RemoteRepository(Protocol):
    """Anything that can report the URL of its origin remote (see ``rlz.git.Repository``)."""

    def original_remote_url(self) -> Result[str, object]: ...


@dataclass(frozen=True, slots=True)
class _Parts:
    scheme: str
    host: str | None
    port: int | None
    path: str


def _split(url: str) -> Result[_Parts, str]:
    if "://" in url:
        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as e:
            return Err(str(e))
        return Ok(_Parts(scheme=parts.scheme.lower(), host=parts.hostname or None, port=port, path=parts.path))

    if not _WINDOWS_DRIVE_RE.match(url):
        m = _SCP_RE.match(url)
        if m is not None:
            return Ok(_Parts(scheme="ssh", host=m.group("host").lower(), port=None, path=m.group("path")))

    # Anything else is a path on the local filesystem.
    return Ok(_Parts(scheme="file", host=None, port=None, path=url.replace("\\", "/")))


@dataclass(frozen=True, slots=True)
class RepoUrl:
    """Structured git remote: ``scheme://host[:port]/owner/name``."""

    scheme: str
    host: str
    owner: str
    name: str
    port: int | None = None

    @classmethod
    def parse(cls, git_host_url: str) -> Result[RepoUrl, RepoUrlError]:
        """Parse a URL-style (``https://``, ``ssh://``...) or SCP-style (``git@host:o/r``) remote."""
        url = git_host_url.strip()
        split = _split(url)
        if isinstance(split, Err):
            return Err(RepoUrlError(kind="invalid_url", message=f"cannot parse git url {git_host_url}: {split.error}"))
        parts = split.value

        segments = [s for s in parts.path.split("/") if s]
        if segments and segments[-1].endswith(".git"):
            segments[-1] = segments[-1][: -len(".git")]
        if not segments or not segments[-1]:
            return Err(
                RepoUrlError(
                    kind="invalid_url",
                    message=f"cannot parse git url {git_host_url}: missing repository name",
                )
            )

        if len(segments) < 2:
            return Err(RepoUrlError(kind="missing_owner", message=f"cannot find owner in git url {git_host_url}"))
        if parts.host is None:
            return Err(RepoUrlError(kind="missing_host", message=f"cannot find host in git url {git_host_url}"))

        return Ok(
            cls(
                scheme=parts.scheme,
                host=parts.host,
                port=parts.port,
                owner="/".join(segments[:-1]),
                name=segments[-1],
            )
        )

    @classmethod
    def from_repository(cls, repo: RemoteRepository) -> Result[RepoUrl, RepoUrlError]:
        """Parse the origin remote of ``repo``."""
        result = repo.original_remote_url()
        if isinstance(result, Err):
            cause = getattr(result.error, "message", str(result.error))
            return Err(RepoUrlError(kind="missing_origin", message="cannot determine origin url", hint=cause))
        return cls.parse(str(result.value))

    def is_on_github(self) -> bool:
        # Substring match: GitHub Enterprise hosts usually contain "github" too.
        return "github" in self.host

    def _https_base(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.name}"

    def git_release_link(self, prev_tag: str, new_tag: str) -> str:
        """GitHub/Gitea release link.

        On the first release there is no previous tag and the caller passes the
        new tag twice: link the release page instead of a comparison.
        """
        base = self._https_base()
        if prev_tag == new_tag:
            return f"{base}/releases/tag/{new_tag}"
        return f"{base}/compare/{prev_tag}...{new_tag}"

    def git_pr_link(self) -> str:
        pull_path = "pull" if self.is_on_github() else "pulls"
        return f"{self._https_base()}/{pull_path}"

    def gitea_api_url(self) -> str:
        if self.port is not None:
            return f"{self.scheme}://{self.host}:{self.port}/api/v1/"
        return f"{self.scheme}://{self.host}/api/v1/"
