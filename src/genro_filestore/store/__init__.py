# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileStore package - Dot-path access to a JSON document on disk.

This package provides the FileStore class, a single-file key-value store
whose keys are dotted paths into a nested JSON object.

The package is organized into:
- core: Main FileStore class with the public operations
- paths: Key parsing and the read/write navigator over nested dicts
- flatten: Dot-path flattening used by enumeration and prefix search

Example:
    >>> from genro_filestore import FileStore
    >>> store = FileStore('config.json')
    >>> store.set('config.name', 'MyApp')
    >>> store.get('config.name')
    'MyApp'
"""

from .core import FileStore
from .flatten import flatten, iter_flat
from .paths import MISSING, parse_key, read_path, write_path

__all__ = [
    "FileStore",
    "MISSING",
    "flatten",
    "iter_flat",
    "parse_key",
    "read_path",
    "write_path",
]
