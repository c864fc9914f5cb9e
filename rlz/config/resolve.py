"""Resolution of the declared configuration into per-package configurations.

Precedence, per field and independently of other fields:

    1. value set on the ``[[package]]`` entry
    2. value set on ``[workspace]``
    3. built-in default (see ``to_update_config`` / ``to_release_config``)

Command-line force flags are applied after merging and always win.
"""

from __future__ import annotations

from dataclasses import replace

from .model import Config, PackageConfig, PackageSpecificConfig, ReleaseType
from .resolved import (
    GitReleaseConfig,
    GitTagConfig,
    PackageReleaseConfig,
    PackageUpdateConfig,
    PublishConfig,
    ReleaseConfig,
    ReleaseRequest,
    UpdateConfig,
    UpdateRequest,
)

__all__ = [
    "fill_release_config",
    "fill_update_config",
    "to_package_release_config",
    "to_package_update_config",
    "to_release_config",
    "to_update_config",
]


def to_update_config(config: PackageConfig) -> UpdateConfig:
    return UpdateConfig(
        semver_check=config.semver_check is not False,
        changelog_update=config.changelog_update is not False,
        release=config.release is not False,
    )


def to_package_update_config(config: PackageSpecificConfig) -> PackageUpdateConfig:
    return PackageUpdateConfig(
        generic=to_update_config(config.common),
        changelog_path=config.changelog_path,
        changelog_include=config.changelog_include or (),
    )


def to_release_config(config: PackageConfig) -> ReleaseConfig:
    """Apply built-in defaults: everything enabled, nothing draft/dirty/unverified."""
    return ReleaseConfig(
        publish=PublishConfig(
            enabled=config.publish is not False,
            allow_dirty=config.publish_allow_dirty is True,
            no_verify=config.publish_no_verify is True,
        ),
        git_release=GitReleaseConfig(
            enabled=config.git_release_enable is not False,
            draft=config.git_release_draft is True,
            release_type=config.git_release_type or ReleaseType.PROD,
        ),
        git_tag=GitTagConfig(enabled=config.git_tag_enable is not False),
        release=config.release is not False,
    )


def to_package_release_config(config: PackageSpecificConfig) -> PackageReleaseConfig:
    return PackageReleaseConfig(
        generic=to_release_config(config.common),
        changelog_path=config.changelog_path,
    )


def fill_update_config(
    config: Config,
    is_changelog_update_disabled: bool,
    request: UpdateRequest | None = None,
) -> UpdateRequest:
    """Resolve the update configuration of every declared package.

    Args:
        config: Declared configuration.
        is_changelog_update_disabled: Force ``changelog_update = false`` everywhere,
            including packages that explicitly enable it.
        request: Request to fill. A fresh one is used if omitted.
    """
    request = request if request is not None else UpdateRequest()
    defaults = config.workspace.packages_defaults

    default_config = defaults
    if is_changelog_update_disabled:
        default_config = replace(default_config, changelog_update=False)
    request = request.with_default_package_config(to_update_config(default_config))

    for name, package_config in config.packages().items():
        merged = package_config.merge(defaults)
        if is_changelog_update_disabled:
            merged = replace(merged, common=replace(merged.common, changelog_update=False))
        request = request.with_package_config(name, to_package_update_config(merged))
    return request


def fill_release_config(
    config: Config,
    allow_dirty: bool,
    no_verify: bool,
    request: ReleaseRequest | None = None,
) -> ReleaseRequest:
    """Resolve the release configuration of every declared package.

    ``allow_dirty`` and ``no_verify`` only ever set their field to ``True``.
    """
    request = request if request is not None else ReleaseRequest()
    defaults = config.workspace.packages_defaults

    request = request.with_default_package_config(
        to_release_config(_force_publish_flags(defaults, allow_dirty, no_verify))
    )

    for name, package_config in config.packages().items():
        merged = package_config.merge(defaults)
        merged = replace(merged, common=_force_publish_flags(merged.common, allow_dirty, no_verify))
        request = request.with_package_config(name, to_package_release_config(merged))
    return request


def _force_publish_flags(config: PackageConfig, allow_dirty: bool, no_verify: bool) -> PackageConfig:
    if no_verify:
        config = replace(config, publish_no_verify=True)
    if allow_dirty:
        config = replace(config, publish_allow_dirty=True)
    return config
