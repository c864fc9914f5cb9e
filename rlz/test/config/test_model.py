"""Tests for rlz.config.model."""

from __future__ import annotations

import itertools
from dataclasses import fields, replace
from datetime import timedelta
from pathlib import Path

import pytest

from rlz.config.model import (
    Config,
    PackageConfig,
    PackageSpecificConfig,
    PackageSpecificConfigWithName,
    ReleaseType,
    Workspace,
)
from rlz.core.result import Err, Ok

FIELD_NAMES = [f.name for f in fields(PackageConfig)]


def _value_for(name: str, flag: bool) -> object:
    if name == "git_release_type":
        return ReleaseType.PRE if flag else ReleaseType.AUTO
    return flag


class TestPackageConfigMerge:
    def test_empty_specific_yields_default(self) -> None:
        default = PackageConfig(
            changelog_update=False,
            git_release_type=ReleaseType.PRE,
            publish=True,
            release=False,
        )
        assert PackageConfig().merge(default) == default

    def test_specific_wins_field_by_field(self) -> None:
        for name in FIELD_NAMES:
            specific = replace(PackageConfig(), **{name: _value_for(name, True)})
            default = PackageConfig(**{n: _value_for(n, False) for n in FIELD_NAMES})

            merged = specific.merge(default)

            for other in FIELD_NAMES:
                expected = _value_for(other, other == name)
                assert getattr(merged, other) == expected, (name, other)

    @pytest.mark.parametrize(
        ("specific", "default"),
        list(itertools.product([None, True, False], repeat=2)),
    )
    def test_tri_state_coalesce(self, specific: bool | None, default: bool | None) -> None:
        merged = PackageConfig(publish=specific).merge(PackageConfig(publish=default))
        assert merged.publish == (specific if specific is not None else default)

    def test_explicit_false_is_not_overridden(self) -> None:
        merged = PackageConfig(git_tag_enable=False).merge(PackageConfig(git_tag_enable=True))
        assert merged.git_tag_enable is False

    def test_merge_is_idempotent(self) -> None:
        specific = PackageConfig(semver_check=False)
        default = PackageConfig(semver_check=True, publish=False)
        once = specific.merge(default)
        assert once.merge(default) == once

    def test_merge_is_not_commutative(self) -> None:
        a = PackageConfig(publish=True)
        b = PackageConfig(publish=False)
        assert a.merge(b).publish is True
        assert b.merge(a).publish is False


class TestPackageSpecificConfig:
    def test_merge_keeps_package_only_fields(self) -> None:
        specific = PackageSpecificConfig(
            common=PackageConfig(release=False),
            changelog_path=Path("docs/CHANGELOG.md"),
            changelog_include=("pkg-a", "pkg-b"),
        )
        merged = specific.merge(PackageConfig(release=True, publish=False))

        assert merged.common == PackageConfig(release=False, publish=False)
        assert merged.changelog_path == Path("docs/CHANGELOG.md")
        assert merged.changelog_include == ("pkg-a", "pkg-b")

    def test_frozen(self) -> None:
        config = PackageSpecificConfig()
        with pytest.raises(AttributeError):
            config.changelog_path = Path("x")  # type: ignore[misc]


class TestWorkspace:
    def test_defaults(self) -> None:
        ws = Workspace()
        assert ws.packages_defaults == PackageConfig()
        assert ws.pr_draft is False
        assert ws.pr_labels == ()
        assert ws.repo_url is None

    def test_publish_timeout_default_is_30_minutes(self) -> None:
        assert Workspace().publish_timeout_duration() == Ok(timedelta(minutes=30))

    def test_publish_timeout_custom(self) -> None:
        ws = Workspace(publish_timeout="10m")
        assert ws.publish_timeout_duration() == Ok(timedelta(minutes=10))

    def test_publish_timeout_invalid(self) -> None:
        result = Workspace(publish_timeout="abc").publish_timeout_duration()
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_timeout"
        assert "invalid publish_timeout abc" in result.error.message

    def test_publish_timeout_out_of_range(self) -> None:
        result = Workspace(publish_timeout="99999999999999999999d").publish_timeout_duration()
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_timeout"
        assert "invalid publish_timeout 99999999999999999999d" in result.error.message


class TestConfig:
    def test_packages_by_name(self) -> None:
        a = PackageSpecificConfigWithName("a", PackageSpecificConfig(common=PackageConfig(publish=False)))
        b = PackageSpecificConfigWithName("b")
        config = Config(package=(a, b))
        assert config.packages() == {"a": a.config, "b": b.config}

    def test_duplicate_names_last_wins(self) -> None:
        first = PackageSpecificConfigWithName("a", PackageSpecificConfig(common=PackageConfig(publish=False)))
        second = PackageSpecificConfigWithName("a", PackageSpecificConfig(common=PackageConfig(publish=True)))
        config = Config(package=(first, second))
        assert config.packages() == {"a": second.config}
