# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Flattening of nested documents into dot-path leaves."""

from __future__ import annotations

from typing import Any, Iterator


def iter_flat(doc: dict[str, Any], prefix: str = '') -> Iterator[tuple[str, Any]]:
    """Yield (path, value) for every leaf of doc in insertion order.

    Nested mappings are recursed into; everything else (scalars, None and
    lists) is a leaf. Lists are emitted whole, not element by element.
    An empty nested mapping yields nothing.

    Example:
        >>> list(iter_flat({'a': {'b': 1, 'c': [1, 2]}, 'd': None}))
        [('a.b', 1), ('a.c', [1, 2]), ('d', None)]
    """
    for key, value in doc.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from iter_flat(value, path)
        else:
            yield path, value


def flatten(doc: dict[str, Any]) -> dict[str, Any]:
    """Return a single-level dict mapping dot paths to leaf values."""
    return dict(iter_flat(doc))
