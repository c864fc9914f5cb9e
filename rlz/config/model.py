"""Declared release configuration.

This module mirrors the structure of ``rlz.toml``:

    [workspace]                 -> Workspace (shared fields + workspace-only fields)
    [[package]]                 -> PackageSpecificConfigWithName

Every field of ``PackageConfig`` is tri-state: ``None`` means "not decided at
this level, inherit". Built-in defaults are applied only when converting to the
resolved types in ``rlz.config.resolve``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from pathlib import Path

from rlz.core.result import Err, Ok, Result

from .duration import parse_duration
from .errors import ConfigError

__all__ = [
    "DEFAULT_PUBLISH_TIMEOUT",
    "Config",
    "PackageConfig",
    "PackageSpecificConfig",
    "PackageSpecificConfigWithName",
    "ReleaseType",
    "Workspace",
]

DEFAULT_PUBLISH_TIMEOUT = "30m"


class ReleaseType(StrEnum):
    """How the git release created for a tag is marked."""

    PROD = "prod"
    PRE = "pre"
    # Pre-release only if the tag carries a semver pre-release suffix
    # (e.g. v1.0.0-rc1); decided by whoever creates the release.
    AUTO = "auto"


@dataclass(frozen=True, slots=True)
class PackageConfig:
    """Configuration that can be set both at the workspace and at the package level.

    Attributes:
        changelog_update: Create/update the changelog. Updated if unset.
        git_release_enable: Publish a GitHub/Gitea release for the new tag. Enabled if unset.
        git_release_type: Whether the release is marked as a pre-release.
        git_release_draft: Create the release as a draft. Not a draft if unset.
        git_tag_enable: Push a git tag for the new version. Enabled if unset.
        publish: Publish the package to its registry. Enabled if unset.
        publish_allow_dirty: Allow publishing from a dirty working tree.
        publish_no_verify: Skip the registry's verification build.
        semver_check: Run the API compatibility check. Enabled if unset.
        release: Take part in the update/release process at all. Enabled if unset.
    """

    changelog_update: bool | None = None
    git_release_enable: bool | None = None
    git_release_type: ReleaseType | None = None
    git_release_draft: bool | None = None
    git_tag_enable: bool | None = None
    publish: bool | None = None
    publish_allow_dirty: bool | None = None
    publish_no_verify: bool | None = None
    semver_check: bool | None = None
    release: bool | None = None

    def merge(self, default: PackageConfig) -> PackageConfig:
        """Fill every unset field of ``self`` from ``default``.

        Values set on ``self`` always win, so ``merge`` is not commutative.
        """
        return PackageConfig(
            changelog_update=_coalesce(self.changelog_update, default.changelog_update),
            git_release_enable=_coalesce(self.git_release_enable, default.git_release_enable),
            git_release_type=_coalesce(self.git_release_type, default.git_release_type),
            git_release_draft=_coalesce(self.git_release_draft, default.git_release_draft),
            git_tag_enable=_coalesce(self.git_tag_enable, default.git_tag_enable),
            publish=_coalesce(self.publish, default.publish),
            publish_allow_dirty=_coalesce(self.publish_allow_dirty, default.publish_allow_dirty),
            publish_no_verify=_coalesce(self.publish_no_verify, default.publish_no_verify),
            semver_check=_coalesce(self.semver_check, default.semver_check),
            release=_coalesce(self.release, default.release),
        )


def _coalesce[T](value: T | None, default: T | None) -> T | None:
    return value if value is not None else default


@dataclass(frozen=True, slots=True)
class PackageSpecificConfig:
    """Configuration of a single ``[[package]]`` entry.

    ``changelog_path`` and ``changelog_include`` only exist at this level and
    are never inherited.
    """

    common: PackageConfig = field(default_factory=PackageConfig)
    changelog_path: Path | None = None
    # Names of packages whose changelogs are folded into this one.
    changelog_include: tuple[str, ...] | None = None

    def merge(self, default: PackageConfig) -> PackageSpecificConfig:
        return PackageSpecificConfig(
            common=self.common.merge(default),
            changelog_path=self.changelog_path,
            changelog_include=self.changelog_include,
        )


@dataclass(frozen=True, slots=True)
class PackageSpecificConfigWithName:
    name: str
    config: PackageSpecificConfig = field(default_factory=PackageSpecificConfig)


@dataclass(frozen=True, slots=True)
class Workspace:
    """Configuration of the ``[workspace]`` table.

    Attributes:
        packages_defaults: Shared fields, applied to every package unless overridden.
        allow_dirty: Allow updating a dirty working tree.
        changelog_config: Path to the changelog generator configuration.
        dependencies_update: Update every dependency in the lockfile, not only
            the workspace packages.
        pr_draft: Open the release PR as a draft.
        pr_labels: Labels added to the release PR.
        publish_timeout: Human-readable duration, see ``publish_timeout_duration``.
        repo_url: Repository URL used for changelog links. Defaults to the
            origin remote when unset.
    """

    packages_defaults: PackageConfig = field(default_factory=PackageConfig)
    allow_dirty: bool | None = None
    changelog_config: Path | None = None
    dependencies_update: bool | None = None
    pr_draft: bool = False
    pr_labels: tuple[str, ...] = ()
    publish_timeout: str | None = None
    repo_url: str | None = None

    def publish_timeout_duration(self) -> Result[timedelta, ConfigError]:
        """Timeout of the publish step. Defaults to 30 minutes."""
        raw = self.publish_timeout if self.publish_timeout is not None else DEFAULT_PUBLISH_TIMEOUT
        result = parse_duration(raw)
        if isinstance(result, Err):
            return Err(
                ConfigError(
                    kind="invalid_timeout",
                    message=f"invalid publish_timeout {raw}: {result.error}",
                    hint='use a duration such as "30m" or "1h 30m"',
                )
            )
        return Ok(result.value)


@dataclass(frozen=True, slots=True)
class Config:
    """Root of the declared configuration."""

    workspace: Workspace = field(default_factory=Workspace)
    package: tuple[PackageSpecificConfigWithName, ...] = ()

    def packages(self) -> dict[str, PackageSpecificConfig]:
        """Package-specific configurations by name.

        When two entries share a name the last one wins.
        """
        return {p.name: p.config for p in self.package}
