"""Loading and writing ``rlz.toml``.

The schema is closed: unknown keys at any level are rejected so that typos
surface immediately instead of being ignored.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from urllib.parse import urlsplit

import tomli_w

from rlz.core.result import Err, Ok, Result
from rlz.core.structured import (
    FieldTypeError,
    StrDict,
    as_str_dict,
    get_bool,
    get_str,
    get_str_list,
    get_table,
    get_table_list,
    unknown_keys,
)

from .errors import ConfigError
from .model import (
    Config,
    PackageConfig,
    PackageSpecificConfig,
    PackageSpecificConfigWithName,
    ReleaseType,
    Workspace,
)

__all__ = [
    "CONFIG_FILE_NAMES",
    "PACKAGE_CONFIG_KEYS",
    "config_from_dict",
    "config_from_toml",
    "config_to_dict",
    "dumps_config",
    "find_config",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAMES = ("rlz.toml", ".rlz.toml")

# Shared by [workspace] and [[package]], in serialization order.
PACKAGE_CONFIG_KEYS = (
    "changelog_update",
    "git_release_enable",
    "git_release_type",
    "git_release_draft",
    "git_tag_enable",
    "publish",
    "publish_allow_dirty",
    "publish_no_verify",
    "semver_check",
    "release",
)
_TOP_LEVEL_KEYS = ("workspace", "package")
_WORKSPACE_ONLY_KEYS = (
    "allow_dirty",
    "changelog_config",
    "dependencies_update",
    "pr_draft",
    "pr_labels",
    "publish_timeout",
    "repo_url",
)
_PACKAGE_ONLY_KEYS = ("changelog_path", "changelog_include")


class _SchemaError(Exception):
    def __init__(self, error: ConfigError) -> None:
        super().__init__(error.message)
        self.error = error


def _reject_unknown(table: Mapping[str, object], allowed: tuple[str, ...], where: str) -> None:
    unknown = unknown_keys(table, allowed)
    if unknown:
        raise _SchemaError(
            ConfigError(
                kind="unknown_field",
                message=f"unknown field `{unknown[0]}` in {where}",
                hint=f"expected one of: {', '.join(allowed)}",
            )
        )


def _get_release_type(table: Mapping[str, object], key: str) -> ReleaseType | None:
    raw = get_str(table, key)
    if raw is None:
        return None
    try:
        return ReleaseType(raw)
    except ValueError:
        choices = ", ".join(t.value for t in ReleaseType)
        raise _SchemaError(
            ConfigError(
                kind="invalid_value",
                message=f"invalid value `{raw}` for `{key}`",
                hint=f"expected one of: {choices}",
            )
        ) from None


def _get_path(table: Mapping[str, object], key: str) -> Path | None:
    raw = get_str(table, key)
    return Path(raw) if raw is not None else None


def _get_url(table: Mapping[str, object], key: str) -> str | None:
    raw = get_str(table, key)
    if raw is None:
        return None
    try:
        parts = urlsplit(raw)
        valid = bool(parts.scheme and parts.netloc)
    except ValueError:
        valid = False
    if not valid:
        raise _SchemaError(
            ConfigError(
                kind="invalid_value",
                message=f"invalid url `{raw}` for `{key}`",
                hint="use an absolute url such as https://github.com/owner/repo",
            )
        )
    return raw


def _package_config_from_table(table: Mapping[str, object]) -> PackageConfig:
    return PackageConfig(
        changelog_update=get_bool(table, "changelog_update"),
        git_release_enable=get_bool(table, "git_release_enable"),
        git_release_type=_get_release_type(table, "git_release_type"),
        git_release_draft=get_bool(table, "git_release_draft"),
        git_tag_enable=get_bool(table, "git_tag_enable"),
        publish=get_bool(table, "publish"),
        publish_allow_dirty=get_bool(table, "publish_allow_dirty"),
        publish_no_verify=get_bool(table, "publish_no_verify"),
        semver_check=get_bool(table, "semver_check"),
        release=get_bool(table, "release"),
    )


def _workspace_from_table(table: Mapping[str, object]) -> Workspace:
    _reject_unknown(table, PACKAGE_CONFIG_KEYS + _WORKSPACE_ONLY_KEYS, "[workspace]")
    return Workspace(
        packages_defaults=_package_config_from_table(table),
        allow_dirty=get_bool(table, "allow_dirty"),
        changelog_config=_get_path(table, "changelog_config"),
        dependencies_update=get_bool(table, "dependencies_update"),
        pr_draft=get_bool(table, "pr_draft") or False,
        pr_labels=get_str_list(table, "pr_labels") or (),
        publish_timeout=get_str(table, "publish_timeout"),
        repo_url=_get_url(table, "repo_url"),
    )


def _package_from_table(table: Mapping[str, object], index: int) -> PackageSpecificConfigWithName:
    where = f"[[package]] #{index + 1}"
    _reject_unknown(table, ("name",) + PACKAGE_CONFIG_KEYS + _PACKAGE_ONLY_KEYS, where)
    name = get_str(table, "name")
    if name is None:
        raise _SchemaError(ConfigError(kind="missing_field", message=f"missing field `name` in {where}"))
    return PackageSpecificConfigWithName(
        name=name,
        config=PackageSpecificConfig(
            common=_package_config_from_table(table),
            changelog_path=_get_path(table, "changelog_path"),
            changelog_include=get_str_list(table, "changelog_include"),
        ),
    )


def config_from_dict(data: Mapping[str, object]) -> Result[Config, ConfigError]:
    """Build a Config from a parsed TOML document."""
    try:
        _reject_unknown(data, _TOP_LEVEL_KEYS, "the configuration root")
        workspace_table = get_table(data, "workspace") or {}
        package_tables = get_table_list(data, "package") or []
        return Ok(
            Config(
                workspace=_workspace_from_table(workspace_table),
                package=tuple(_package_from_table(t, i) for i, t in enumerate(package_tables)),
            )
        )
    except _SchemaError as e:
        return Err(e.error)
    except FieldTypeError as e:
        return Err(ConfigError(kind="invalid_value", message=str(e)))


def config_from_toml(text: str, path: Path | None = None) -> Result[Config, ConfigError]:
    try:
        data_obj: object = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(kind="syntax", message=f"Invalid TOML syntax: {e}", path=path))
    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError(kind="syntax", message="Config root must be a TOML table", path=path))

    result = config_from_dict(data)
    if isinstance(result, Err) and path is not None:
        return Err(
            ConfigError(
                kind=result.error.kind,
                message=result.error.message,
                path=path,
                hint=result.error.hint,
            )
        )
    return result


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate a configuration file.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        return Err(ConfigError(kind="not_found", message=f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(kind="io", message=f"Permission denied reading: {path}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(kind="io", message=f"Error reading config: {e}", path=path))
    return config_from_toml(text, path=path)


def find_config(root: Path) -> Path | None:
    """Return the first configuration file found in ``root``."""
    for name in CONFIG_FILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config_or_default(root: Path) -> Result[Config, ConfigError]:
    """Load the configuration of ``root``, or the default one if there is no file.

    Errors in an existing file are still reported.
    """
    path = find_config(root)
    if path is None:
        return Ok(Config())
    return load_config(path)


def _package_config_to_dict(config: PackageConfig) -> StrDict:
    out: StrDict = {}
    for key in PACKAGE_CONFIG_KEYS:
        value = getattr(config, key)
        if value is None:
            continue
        out[key] = value.value if isinstance(value, ReleaseType) else value
    return out


def config_to_dict(config: Config) -> StrDict:
    """Serialize a Config to TOML-ready data, omitting unset fields."""
    ws = config.workspace
    workspace: StrDict = _package_config_to_dict(ws.packages_defaults)
    if ws.allow_dirty is not None:
        workspace["allow_dirty"] = ws.allow_dirty
    if ws.changelog_config is not None:
        workspace["changelog_config"] = ws.changelog_config.as_posix()
    if ws.dependencies_update is not None:
        workspace["dependencies_update"] = ws.dependencies_update
    workspace["pr_draft"] = ws.pr_draft
    workspace["pr_labels"] = list(ws.pr_labels)
    if ws.publish_timeout is not None:
        workspace["publish_timeout"] = ws.publish_timeout
    if ws.repo_url is not None:
        workspace["repo_url"] = ws.repo_url

    packages: list[StrDict] = []
    for p in config.package:
        entry: StrDict = {"name": p.name}
        entry.update(_package_config_to_dict(p.config.common))
        if p.config.changelog_path is not None:
            entry["changelog_path"] = p.config.changelog_path.as_posix()
        if p.config.changelog_include is not None:
            entry["changelog_include"] = list(p.config.changelog_include)
        packages.append(entry)

    out: StrDict = {"workspace": workspace}
    if packages:
        out["package"] = packages
    return out


def dumps_config(config: Config) -> str:
    return tomli_w.dumps(config_to_dict(config))
