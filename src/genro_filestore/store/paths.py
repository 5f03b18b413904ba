# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dot-path parsing and navigation over JSON documents.

A key such as ``'player.stats.level'`` is split into segments and applied to
a plain nested ``dict``. Reads never raise on partial paths; writes create
intermediate mappings as needed.

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - Segments are used verbatim as mapping keys. There is no escaping, so
      a literal '.' can never be part of a key name.
    - On reads only, a decimal segment indexes into a list: 'inv.0'
"""

from __future__ import annotations

from typing import Any

from ..exceptions import InvalidKeyError


class _Missing:
    """Marker for an absent value, distinct from JSON null (None)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def parse_key(key: Any, operation: str | None = None) -> list[str]:
    """Split a dot-notation key into its path segments.

    Args:
        key: The key to parse, e.g. 'config.database.host'.
        operation: Name of the calling store method, for error reporting.

    Returns:
        List of segments, at least one.

    Raises:
        InvalidKeyError: If key is not a string or is empty.

    Example:
        >>> parse_key('a.b.c')
        ['a', 'b', 'c']
        >>> parse_key('name')
        ['name']
    """
    if not isinstance(key, str):
        raise InvalidKeyError(
            f"key must be a string, not {type(key).__name__}", operation
        )
    if not key:
        raise InvalidKeyError("No key provided", operation)
    return key.split('.')


def _list_index(segment: str, size: int) -> int | None:
    """Return the list index named by segment, or None if it names none."""
    if not segment.isdecimal():
        return None
    index = int(segment)
    return index if index < size else None


def read_path(
    doc: dict[str, Any], segments: list[str], index_lists: bool = True
) -> Any:
    """Return the value at segments, or MISSING if any step is absent.

    Args:
        doc: The document to read from.
        segments: Path segments as returned by parse_key.
        index_lists: If True (default), a decimal segment applied to a list
            selects that element. If False, only mappings are traversed,
            which is what write_path can reach.

    Returns:
        The stored value (which may be None), or MISSING.
    """
    current: Any = doc
    for segment in segments:
        if isinstance(current, dict):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif index_lists and isinstance(current, list):
            index = _list_index(segment, len(current))
            if index is None:
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def write_path(
    doc: dict[str, Any], segments: list[str], value: Any = MISSING
) -> dict[str, Any]:
    """Assign value at segments, or remove the key when value is MISSING.

    Every non-terminal segment is forced to a mapping: whatever is stored
    there (scalar, list, falsy or not) is replaced by an empty dict before
    descending. Removing an absent key is a no-op and leaves the document
    untouched, intermediate segments included.

    Args:
        doc: The document to mutate in place.
        segments: Path segments as returned by parse_key.
        value: The new value, or MISSING to delete.

    Returns:
        The same doc, for chaining.
    """
    current = doc
    for segment in segments[:-1]:
        child = current.get(segment, MISSING)
        if not isinstance(child, dict):
            if value is MISSING:
                return doc
            child = {}
            current[segment] = child
        current = child

    label = segments[-1]
    if value is MISSING:
        current.pop(label, None)
    else:
        current[label] = value
    return doc
