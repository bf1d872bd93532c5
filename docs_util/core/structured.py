"""Helpers for reading untyped JSON and TOML payloads.

GitHub release listings and the optional config file both arrive as plain
``object`` trees; these helpers validate shape at the boundary and narrow the
static type for the rest of the code.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it is a dict with string keys, else None."""
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_raw_str(table: Mapping[str, object], key: str) -> str:
    """Get a string value verbatim, or "" when missing or not a str.

    Release bodies are markdown where leading whitespace matters.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return ""
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Get a list of non-empty strings; None if the key is missing or not a list."""
    items = as_obj_list(table.get(key))
    if items is None:
        return None
    return tuple(s.strip() for s in items if isinstance(s, str) and s.strip())
