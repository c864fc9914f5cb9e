"""Declared release configuration and its resolution per package.

Usage:
    from rlz.config import fill_release_config, load_config

    match load_config(Path("rlz.toml")):
        case Ok(config):
            request = fill_release_config(config, allow_dirty=False, no_verify=False)
            print(request.get_package_config("my-package").generic.publish.enabled)
        case Err(error):
            print(error.pretty())
"""

from rlz.config.duration import parse_duration
from rlz.config.errors import ConfigError
from rlz.config.loader import (
    config_from_dict,
    config_from_toml,
    config_to_dict,
    dumps_config,
    find_config,
    load_config,
    load_config_or_default,
)
from rlz.config.model import (
    Config,
    PackageConfig,
    PackageSpecificConfig,
    PackageSpecificConfigWithName,
    ReleaseType,
    Workspace,
)
from rlz.config.resolve import fill_release_config, fill_update_config
from rlz.config.resolved import (
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
    # model
    "Config",
    "PackageConfig",
    "PackageSpecificConfig",
    "PackageSpecificConfigWithName",
    "ReleaseType",
    "Workspace",
    # loader
    "ConfigError",
    "config_from_dict",
    "config_from_toml",
    "config_to_dict",
    "dumps_config",
    "find_config",
    "load_config",
    "load_config_or_default",
    "parse_duration",
    # resolution
    "GitReleaseConfig",
    "GitTagConfig",
    "PackageReleaseConfig",
    "PackageUpdateConfig",
    "PublishConfig",
    "ReleaseConfig",
    "ReleaseRequest",
    "UpdateConfig",
    "UpdateRequest",
    "fill_release_config",
    "fill_update_config",
]
