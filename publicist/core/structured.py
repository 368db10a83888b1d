"""Typed reads from parsed TOML and JSON.

``tomllib`` and ``json`` hand back ``object``; these accessors narrow it
and return None for anything of the wrong shape, leaving the error
message to the caller.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    return all(isinstance(k, str) for k in cast(dict[object, object], obj))


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at ``key``; None when missing, blank or not a string."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    return value if isinstance(value, bool) else None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Non-blank strings at ``key``; None if any item is not one."""
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    if not all(isinstance(item, str) and item.strip() for item in items):
        return None
    return cast(list[str], items)


def get_table_list(table: Mapping[str, object], key: str) -> list[StrDict] | None:
    """An array of tables (``[[key]]`` in TOML); None if any item is not a table."""
    value = table.get(key)
    if not isinstance(value, list):
        return None
    tables = [as_str_dict(item) for item in cast(list[object], value)]
    if any(t is None for t in tables):
        return None
    return cast(list[StrDict], tables)
