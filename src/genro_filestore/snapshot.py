# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Reading and writing JSON snapshots on disk.

A snapshot is the whole document as stored in one UTF-8 JSON file. The
store never keeps a snapshot in memory between calls: each operation reads
one, transforms it and writes it back.

Functions:
    - resolve_store_path: absolute path with a '.json' suffix
    - create_json_file: bootstrap a file (and its directories) if missing
    - read_snapshot: decode the file, which must hold a JSON object
    - write_snapshot: encode compact or indented, replacing the file atomically
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .exceptions import CorruptStoreError, StorageError

logger = logging.getLogger(__name__)

JSON_SUFFIX = '.json'
INDENT = 4
COMPACT_SEPARATORS = (',', ':')


def resolve_store_path(path: str | os.PathLike[str]) -> Path:
    """Return path as an absolute Path ending in '.json'.

    Example:
        >>> resolve_store_path('data/db').name
        'db.json'
    """
    resolved = Path(path).expanduser().resolve()
    if resolved.suffix != JSON_SUFFIX:
        resolved = resolved.with_name(resolved.name + JSON_SUFFIX)
    return resolved


def encode_snapshot(doc: dict[str, Any], compact: bool = True) -> str:
    """Serialize doc as JSON text, compact or with a fixed indent."""
    if compact:
        return json.dumps(doc, ensure_ascii=False, separators=COMPACT_SEPARATORS)
    return json.dumps(doc, ensure_ascii=False, indent=INDENT)


def create_json_file(path: str | os.PathLike[str], content: str = '{}') -> Path:
    """Ensure a JSON file exists at path, creating directories as needed.

    An existing file is left untouched.

    Args:
        path: Target location; '.json' is appended if missing.
        content: Initial text for a newly created file.

    Returns:
        The resolved path of the file.

    Raises:
        StorageError: If the directory or file cannot be created.
    """
    filepath = resolve_store_path(path)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        if not filepath.exists():
            filepath.write_text(content, encoding='utf-8')
            logger.debug("Created store file %s", filepath)
    except OSError as exc:
        raise StorageError(f"Cannot create store file {filepath}: {exc}") from exc
    return filepath


def read_snapshot(path: Path) -> dict[str, Any]:
    """Read and decode the document stored at path.

    Raises:
        StorageError: If the file cannot be read.
        CorruptStoreError: If the content is not JSON or not a JSON object.
    """
    try:
        raw = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise StorageError(f"Cannot read store file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise CorruptStoreError(f"Store file {path} is not UTF-8: {exc}") from exc
    try:
        doc = json.loads(raw)
    except ValueError as exc:
        raise CorruptStoreError(f"Store file {path} is not valid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise CorruptStoreError(
            f"Store file {path} must hold a JSON object, not {type(doc).__name__}"
        )
    return doc


def write_snapshot(path: Path, doc: dict[str, Any], compact: bool = True) -> None:
    """Write doc to path by writing a temp file and renaming it over path.

    Raises:
        StorageError: If the file cannot be written.
    """
    content = encode_snapshot(doc, compact)
    tmp_path = path.with_name(path.name + '.tmp')
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(content, encoding='utf-8')
        tmp_path.replace(path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Cannot write store file {path}: {exc}") from exc
    logger.debug("Wrote snapshot %s (compact=%s)", path, compact)
