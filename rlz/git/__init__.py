"""Git remote access and repository URL model.

Usage:
    from rlz.git import Repository, RepoUrl

    match RepoUrl.from_repository(Repository(Path("."))):
        case Ok(url):
            print(url.git_release_link("v0.1.0", "v0.2.0"))
        case Err(error):
            print(f"{error.message} ({error.hint})")
"""

from rlz.git.repo_url import RemoteRepository, RepoUrl, RepoUrlError
from rlz.git.repository import GitError, Repository

__all__ = [
    # Repository
    "GitError",
    "Repository",
    # RepoUrl
    "RemoteRepository",
    "RepoUrl",
    "RepoUrlError",
]
