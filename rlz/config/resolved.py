"""Resolved (engine-facing) configuration.

These types carry no "unset" state: every flag is decided. They are produced by
``rlz.config.resolve`` and consumed by the update and release steps.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType

from .model import ReleaseType


def _empty_packages[T]() -> Mapping[str, T]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class UpdateConfig:
    semver_check: bool = True
    changelog_update: bool = True
    release: bool = True


@dataclass(frozen=True, slots=True)
class PackageUpdateConfig:
    generic: UpdateConfig = field(default_factory=UpdateConfig)
    changelog_path: Path | None = None
    changelog_include: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PublishConfig:
    enabled: bool = True
    allow_dirty: bool = False
    no_verify: bool = False


@dataclass(frozen=True, slots=True)
class GitReleaseConfig:
    enabled: bool = True
    draft: bool = False
    release_type: ReleaseType = ReleaseType.PROD


@dataclass(frozen=True, slots=True)
class GitTagConfig:
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    publish: PublishConfig = field(default_factory=PublishConfig)
    git_release: GitReleaseConfig = field(default_factory=GitReleaseConfig)
    git_tag: GitTagConfig = field(default_factory=GitTagConfig)
    release: bool = True


@dataclass(frozen=True, slots=True)
class PackageReleaseConfig:
    generic: ReleaseConfig = field(default_factory=ReleaseConfig)
    changelog_path: Path | None = None


@dataclass(frozen=True, slots=True)
class UpdateRequest:
    """Update configuration for the default case and for each declared package."""

    default: UpdateConfig = field(default_factory=UpdateConfig)
    packages: Mapping[str, PackageUpdateConfig] = field(default_factory=_empty_packages)

    def with_default_package_config(self, config: UpdateConfig) -> UpdateRequest:
        return replace(self, default=config)

    def with_package_config(self, name: str, config: PackageUpdateConfig) -> UpdateRequest:
        packages = dict(self.packages)
        packages[name] = config
        return replace(self, packages=MappingProxyType(packages))

    def get_package_config(self, name: str) -> PackageUpdateConfig:
        """Config of ``name``, or the default config if the package is not declared."""
        config = self.packages.get(name)
        if config is None:
            return PackageUpdateConfig(generic=self.default)
        return config


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Release configuration for the default case and for each declared package."""

    default: ReleaseConfig = field(default_factory=ReleaseConfig)
    packages: Mapping[str, PackageReleaseConfig] = field(default_factory=_empty_packages)

    def with_default_package_config(self, config: ReleaseConfig) -> ReleaseRequest:
        return replace(self, default=config)

    def with_package_config(self, name: str, config: PackageReleaseConfig) -> ReleaseRequest:
        packages = dict(self.packages)
        packages[name] = config
        return replace(self, packages=MappingProxyType(packages))

    def get_package_config(self, name: str) -> PackageReleaseConfig:
        config = self.packages.get(name)
        if config is None:
            return PackageReleaseConfig(generic=self.default)
        return config
