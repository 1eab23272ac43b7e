"""Split flat invoker property keys into a group id and a sub-key."""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

DEFAULT_GROUP_ID = 1
NAMESPACE = "invoker"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class PropertyKey(NamedTuple):
    key: str
    group_id: int
    subkey: str


def _group_suffix(segment: str) -> Optional[int]:
    # Suffixes outside the signed 32-bit range are not group ids.
    if not _INTEGER.fullmatch(segment):
        return None
    value = int(segment)
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def group_id(key: str) -> int:
    """Return the trailing numeric segment of ``key``, or 1 when there is none.

    ``"invoker.build.2"`` is group 2; ``"invoker.skipTest"``, ``"build"`` and
    ``"invoker.build.4294967296"`` all fall back to group 1.
    """

    suffix = _group_suffix(key.split(".")[-1])
    return DEFAULT_GROUP_ID if suffix is None else suffix


def split_key(key: str) -> PropertyKey:
    """Group id plus the key with the ``invoker.`` namespace and numeric suffix removed."""

    parts = key.split(".")
    gid = group_id(key)
    if len(parts) > 1 and _group_suffix(parts[-1]) is not None:
        parts = parts[:-1]
    if len(parts) > 1 and parts[0] == NAMESPACE:
        parts = parts[1:]
    return PropertyKey(key=key, group_id=gid, subkey=".".join(parts))


__all__ = ["DEFAULT_GROUP_ID", "NAMESPACE", "PropertyKey", "group_id", "split_key"]
