# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileStore entry class."""

from __future__ import annotations

from typing import Any, Iterator


class StoreEntry:
    """A (key, value) pair returned by store enumeration.

    Each entry has:
    - key: A top-level key, or a full dot path in verbose listings
    - value: The value stored under key

    Entries unpack like tuples and compare equal to entries (or 2-tuples)
    holding the same key and value.

    Example:
        >>> entry = StoreEntry('player.name', 'Will')
        >>> entry.key
        'player.name'
        >>> key, value = entry
    """

    __slots__ = ('key', 'value')

    def __init__(self, key: str, value: Any = None) -> None:
        """Initialize a StoreEntry.

        Args:
            key: The entry's key or dot path.
            value: The value stored under key.
        """
        self.key = key
        self.value = value

    def __repr__(self) -> str:
        return f"StoreEntry({self.key!r}, value={self.value!r})"

    def __iter__(self) -> Iterator[Any]:
        yield self.key
        yield self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StoreEntry):
            return (self.key, self.value) == (other.key, other.value)
        if isinstance(other, tuple):
            return (self.key, self.value) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def as_dict(self) -> dict[str, Any]:
        """Return the entry as {'key': ..., 'value': ...}."""
        return {'key': self.key, 'value': self.value}
