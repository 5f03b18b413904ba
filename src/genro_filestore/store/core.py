# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileStore - A single-file JSON key-value store.

This module provides the FileStore class, the public handle of the
genro-filestore library. A FileStore owns one JSON file and exposes
dot-path access to the document it holds.

Key Features:
    - **Single file**: The whole document lives in one UTF-8 JSON file
    - **Path navigation**: Dotted paths ('a.b.c') address nested mappings
    - **Typed updates**: Array (push/pull) and arithmetic operations that
      refuse to run on values of the wrong type
    - **Enumeration**: Top-level or flattened listings and prefix search
    - **No caching**: Every call reads the file, transforms the document
      and writes it back, so external edits are seen on the next call

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - Positional (read only): 'inventory.0' for the first list element

Example:
    Basic usage::

        store = FileStore('data/bot.json')
        store.set('player.name', 'Will')
        store.set('player.level', 15)

        print(store.get('player.name'))  # 'Will'
        store.add('player.level', 1)     # 16

        store.get_all()
        # [StoreEntry('player', value={'name': 'Will', 'level': 16})]
        store.get_all(verbose=True)
        # [StoreEntry('player.name', value='Will'),
        #  StoreEntry('player.level', value=16)]
"""

from __future__ import annotations

import json
import logging
import math
import os
import sys
from pathlib import Path
from typing import Any, Callable, Iterator

from ..entry import StoreEntry
from ..exceptions import (
    DivideByZeroError,
    InvalidOperandError,
    InvalidPathError,
    InvalidValueError,
    NotANumberError,
    NotAnArrayError,
    SamePathError,
)
from ..snapshot import (
    create_json_file,
    read_snapshot,
    resolve_store_path,
    write_snapshot,
)
from .flatten import iter_flat
from .paths import MISSING, parse_key, read_path, write_path

logger = logging.getLogger(__name__)

Number = int | float


def _normalize(value: Any) -> Any:
    """Return a detached JSON copy of value.

    Raises:
        TypeError: If value holds something JSON cannot encode.
        ValueError: On circular references or non-finite floats.
    """
    return json.loads(json.dumps(value, allow_nan=False))


def _is_number(value: Any) -> bool:
    """True for int/float values finite as doubles; bool is not a number here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return abs(value) <= sys.float_info.max
    return isinstance(value, float) and math.isfinite(value)


def _json_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values by value, keeping booleans apart from numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_json_equal(a[k], b[k]) for k in a)
    return type(a) is type(b) and a == b


def _check_location(path: Any, operation: str) -> None:
    if not isinstance(path, (str, os.PathLike)):
        raise InvalidPathError(
            f"path must be a string, not {type(path).__name__}", operation
        )
    if not os.fspath(path):
        raise InvalidPathError("No path provided", operation)


class FileStore:
    """A key-value store persisted as one JSON file.

    FileStore provides:
    - get(key) / has(key) / set(key, value) / delete(key): Dot-path access
    - get_all(verbose) / starts_with(query): Enumeration as StoreEntry lists
    - push / pull: Update stored lists
    - add / subtract / multiply / divide: Update stored numbers
    - backup(path): Copy the document to another file

    The document is never cached: each call is a full read-modify-write
    cycle on the file. Failed precondition checks raise before the write
    step, so the file is left unmodified.

    Attributes:
        path: Resolved location of the backing file.
        compact: True if the file is written without extra whitespace.

    Example:
        >>> store = FileStore('settings', compact=False)  # settings.json
        >>> store.set('ui.theme', 'dark')
        >>> store['ui.theme']
        'dark'
    """

    __slots__ = ('_path', '_compact')

    def __init__(
        self,
        path: str | os.PathLike[str] = 'database.json',
        compact: bool = True,
    ) -> None:
        """Initialize a FileStore, creating the backing file if needed.

        Args:
            path: Location of the JSON file. Missing directories are created,
                a missing file is initialized with an empty object and
                '.json' is appended when the name lacks it.
            compact: If True (default), write without whitespace; otherwise
                write indented, human readable JSON.

        Raises:
            InvalidPathError: If path is empty or not a string/path.
            StorageError: If the file cannot be created.
        """
        _check_location(path, '__init__')
        self._path = create_json_file(path)
        self._compact = compact

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"FileStore({str(self._path)!r}, compact={self._compact})"

    def __len__(self) -> int:
        """Return the number of top-level keys."""
        return len(self._read())

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys in stored order."""
        return iter(list(self._read()))

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __getitem__(self, key: str) -> Any:
        """Get value by path.

        Raises:
            KeyError: If nothing is stored at key.
        """
        value = read_path(self._read(), parse_key(key, 'get'))
        if value is MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        segments = parse_key(key, 'delete')
        if read_path(self._read(), segments, index_lists=False) is MISSING:
            raise KeyError(key)
        self.delete(key)

    @property
    def path(self) -> Path:
        """Resolved location of the backing file."""
        return self._path

    @property
    def compact(self) -> bool:
        """True if the file is written in compact form."""
        return self._compact

    # ==================== Snapshot I/O ====================

    def _read(self) -> dict[str, Any]:
        return read_snapshot(self._path)

    def _write(self, doc: dict[str, Any]) -> None:
        write_snapshot(self._path, doc, self._compact)

    # ==================== Core API ====================

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value at the given path.

        Args:
            key: Dotted path. On reads, a decimal segment indexes a list.
            default: Value returned when nothing is stored at key.

        Returns:
            The stored value, or default.

        Raises:
            InvalidKeyError: If key is empty or not a string.

        Example:
            >>> store.get('player.name')
            'Will'
            >>> store.get('player.inventory.0')
            'Sword'
        """
        value = read_path(self._read(), parse_key(key, 'get'))
        return default if value is MISSING else value

    def has(self, key: str) -> bool:
        """True if a value (including None) is stored at key."""
        return read_path(self._read(), parse_key(key, 'has')) is not MISSING

    def set(self, key: str, value: Any) -> None:
        """Set a value at the given path, creating intermediate mappings.

        Any non-mapping value found along the path is replaced by a mapping.
        A value JSON cannot represent (functions, arbitrary objects, cycles,
        NaN or infinities) is dropped: a warning is logged and the file is
        not written.

        Args:
            key: Dotted path to the item (e.g., 'config.database.host').
            value: A JSON-serializable value.

        Raises:
            InvalidKeyError: If key is empty or not a string.
            InvalidValueError: If value is the MISSING sentinel.

        Example:
            >>> store.set('foo.bar', 'value')
            # => {'foo': {'bar': 'value'}}
        """
        segments = parse_key(key, 'set')
        if value is MISSING:
            raise InvalidValueError("No value provided", 'set')
        try:
            value = _normalize(value)
        except (TypeError, ValueError) as exc:
            logger.warning("Dropping unserializable value for key %r: %s", key, exc)
            return
        doc = self._read()
        write_path(doc, segments, value)
        self._write(doc)

    def delete(self, key: str) -> None:
        """Delete the value at the given path. Absent keys are ignored.

        Raises:
            InvalidKeyError: If key is empty or not a string.
        """
        segments = parse_key(key, 'delete')
        doc = self._read()
        write_path(doc, segments, MISSING)
        self._write(doc)

    def delete_all(self) -> None:
        """Reset the store to an empty document. This cannot be undone."""
        self._write({})

    # ==================== Enumeration ====================

    def get_all(self, verbose: bool = False) -> list[StoreEntry]:
        """Return all entries in stored order.

        Args:
            verbose: If False (default), one entry per top-level key. If
                True, nested mappings are flattened to dot paths; lists stay
                whole.

        Example:
            >>> store.get_all()
            [StoreEntry('foo', value={'bar': 'value'})]
            >>> store.get_all(verbose=True)
            [StoreEntry('foo.bar', value='value')]
        """
        doc = self._read()
        items = iter_flat(doc) if verbose else doc.items()
        return [StoreEntry(key, value) for key, value in items]

    def starts_with(self, query: str) -> list[StoreEntry]:
        """Return the flattened entries whose dot path starts with query.

        Matching is a plain string prefix test, so 'qu' matches 'quux.qux'.

        Raises:
            InvalidKeyError: If query is empty or not a string.
        """
        parse_key(query, 'starts_with')
        return [entry for entry in self.get_all(True) if entry.key.startswith(query)]

    # ==================== Arrays ====================

    def _update_array(
        self,
        operation: str,
        key: str,
        fn: Callable[[list[Any]], list[Any]],
    ) -> list[Any]:
        segments = parse_key(key, operation)
        doc = self._read()
        current = read_path(doc, segments, index_lists=False)
        if not isinstance(current, list):
            raise NotAnArrayError(f"Value at {key!r} is not an array", operation)
        result = fn(current)
        write_path(doc, segments, result)
        self._write(doc)
        return result

    def push(self, key: str, *items: Any) -> list[Any]:
        """Append items, in order, to the list stored at key.

        Returns:
            The updated list.

        Raises:
            InvalidKeyError: If key is empty or not a string.
            InvalidValueError: If an item is not JSON-serializable.
            NotAnArrayError: If key is absent or does not hold a list.

        Example:
            >>> store.push('inventory', 'Sword', 'Pick')
            ['Sword', 'Pick']
        """
        parse_key(key, 'push')
        try:
            new_items = [_normalize(item) for item in items]
        except (TypeError, ValueError) as exc:
            raise InvalidValueError(f"Cannot store item: {exc}", 'push') from exc
        return self._update_array('push', key, lambda current: current + new_items)

    def pull(self, key: str, *items: Any) -> list[Any]:
        """Remove every element equal to any of items from the list at key.

        Items are compared in their JSON form, so a tuple matches a stored
        list and 1 matches 1.0, while True and 1 do not. Items JSON cannot
        represent match nothing.

        Returns:
            The updated list.

        Raises:
            InvalidKeyError: If key is empty or not a string.
            NotAnArrayError: If key is absent or does not hold a list.
        """
        targets = []
        for item in items:
            try:
                targets.append(_normalize(item))
            except (TypeError, ValueError):
                continue

        def _without(current: list[Any]) -> list[Any]:
            return [
                element for element in current
                if not any(_json_equal(element, target) for target in targets)
            ]

        return self._update_array('pull', key, _without)

    # ==================== Arithmetic ====================

    def _update_number(
        self,
        operation: str,
        key: str,
        operand: Number,
        fn: Callable[[Number, Number], Number],
    ) -> Number:
        segments = parse_key(key, operation)
        if not _is_number(operand):
            raise InvalidOperandError(
                f"Operand must be a finite number, not {operand!r}", operation
            )
        doc = self._read()
        current = read_path(doc, segments, index_lists=False)
        if not _is_number(current):
            raise NotANumberError(f"Value at {key!r} is not a number", operation)
        try:
            result = fn(current, operand)
        except OverflowError as exc:
            raise InvalidOperandError("Result is not a finite number", operation) from exc
        if not _is_number(result):
            raise InvalidOperandError("Result is not a finite number", operation)
        write_path(doc, segments, result)
        self._write(doc)
        return result

    def add(self, key: str, value: Number) -> Number:
        """Add value to the number stored at key and return the result.

        Raises:
            InvalidKeyError: If key is empty or not a string.
            InvalidOperandError: If value or the result is not finite.
            NotANumberError: If key is absent or does not hold a number.

        Example:
            >>> store.set('coins', 500)
            >>> store.add('coins', 250)
            750
        """
        return self._update_number('add', key, value, lambda a, b: a + b)

    def subtract(self, key: str, value: Number) -> Number:
        """Subtract value from the number stored at key and return the result."""
        return self._update_number('subtract', key, value, lambda a, b: a - b)

    def multiply(self, key: str, value: Number) -> Number:
        """Multiply the number stored at key by value and return the result."""
        return self._update_number('multiply', key, value, lambda a, b: a * b)

    def divide(self, key: str, value: Number) -> Number:
        """Divide the number stored at key by value and return the result.

        Uses true division, so the stored result is a float.

        Raises:
            DivideByZeroError: If value is zero; the stored number is kept.
        """
        def _divide(a: Number, b: Number) -> Number:
            if b == 0:
                raise DivideByZeroError(f"Cannot divide {key!r} by zero", 'divide')
            return a / b

        return self._update_number('divide', key, value, _divide)

    # ==================== Backup ====================

    def backup(self, path: str | os.PathLike[str]) -> Path:
        """Write the current document, compact, to another file.

        An existing file at the destination is replaced. Backing up a store
        with no entries is allowed but logged as a warning.

        Args:
            path: Destination; '.json' is appended if missing.

        Returns:
            The resolved destination path.

        Raises:
            InvalidPathError: If path is empty or not a string/path.
            SamePathError: If path resolves to this store's own file.

        Example:
            >>> store.backup('backups/db-backup.json')
        """
        _check_location(path, 'backup')
        destination = resolve_store_path(path)
        if destination == self._path:
            raise SamePathError("Path is same as database", 'backup')
        doc = self._read()
        if next(iter_flat(doc), None) is None:
            logger.warning("Backing up empty store %s", self._path)
        write_snapshot(destination, doc, compact=True)
        return destination
