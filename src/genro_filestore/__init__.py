# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FileStore - Single-file JSON key-value store with dot-path keys.

A lightweight, zero-dependency library for simple persistent state
(configuration, small bots, prototypes) without a database server.
"""

__version__ = "0.1.0"

import logging

from .entry import StoreEntry
from .exceptions import (
    CorruptStoreError,
    DivideByZeroError,
    FileStoreError,
    InvalidKeyError,
    InvalidOperandError,
    InvalidPathError,
    InvalidValueError,
    NotANumberError,
    NotAnArrayError,
    SamePathError,
    StorageError,
)
from .store import MISSING, FileStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "FileStore",
    "StoreEntry",
    "MISSING",
    # Exceptions
    "FileStoreError",
    "InvalidKeyError",
    "InvalidValueError",
    "NotAnArrayError",
    "NotANumberError",
    "InvalidOperandError",
    "DivideByZeroError",
    "InvalidPathError",
    "SamePathError",
    "CorruptStoreError",
    "StorageError",
]
