"""Helpers for reading untyped TOML tables.

Each getter distinguishes "absent" (``None``) from "present with the wrong
type", which is reported as ``FieldTypeError`` so that the loader can name the
offending field instead of silently falling back to a default.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


class FieldTypeError(Exception):
    """A key is present but holds a value of the wrong type."""

    def __init__(self, key: str, expected: str, actual: str) -> None:
        super().__init__(key, expected, actual)
        self.key = key
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return f"invalid type for `{self.key}`: expected {self.expected}, found {self.actual}"


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def _type_name(value: object) -> str:
    return type(value).__name__


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise FieldTypeError(key, "a boolean", _type_name(value))
    return value


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value. Unlike user-facing text fields, whitespace is kept."""
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FieldTypeError(key, "a string", _type_name(value))
    return value


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise FieldTypeError(key, "an array of strings", _type_name(value))
    items = cast(list[object], value)
    for item in items:
        if not isinstance(item, str):
            raise FieldTypeError(key, "an array of strings", f"array containing {_type_name(item)}")
    return tuple(cast(list[str], items))


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    value = table.get(key)
    if value is None:
        return None
    result = as_str_dict(value)
    if result is None:
        raise FieldTypeError(key, "a table", _type_name(value))
    return result


def get_table_list(table: Mapping[str, object], key: str) -> list[StrDict] | None:
    """Get an array of tables (``[[key]]`` in TOML)."""
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise FieldTypeError(key, "an array of tables", _type_name(value))
    out: list[StrDict] = []
    for item in cast(list[object], value):
        entry = as_str_dict(item)
        if entry is None:
            raise FieldTypeError(key, "an array of tables", f"array containing {_type_name(item)}")
        out.append(entry)
    return out


def unknown_keys(table: Mapping[str, object], allowed: Iterable[str]) -> list[str]:
    """Return keys of ``table`` not in ``allowed``, in document order."""
    allowed_set = frozenset(allowed)
    return [k for k in table if k not in allowed_set]
