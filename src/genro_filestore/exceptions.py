# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileStore exceptions."""

from __future__ import annotations


class FileStoreError(Exception):
    """Base exception for FileStore errors.

    Args:
        message: Human readable description of the failure.
        operation: Name of the public store method that failed, if any.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        message = super().__str__()
        if self.operation:
            return f"FileStore.{self.operation}(): {message}"
        return message


class InvalidKeyError(FileStoreError, ValueError):
    """Raised when a key or query is missing, empty, or not a string."""

    pass


class InvalidValueError(FileStoreError, ValueError):
    """Raised when a value cannot be stored (e.g. the MISSING sentinel)."""

    pass


class NotAnArrayError(FileStoreError, TypeError):
    """Raised when an array operation targets a value that is not a list."""

    pass


class NotANumberError(FileStoreError, TypeError):
    """Raised when an arithmetic operation targets a non-numeric value."""

    pass


class InvalidOperandError(FileStoreError, ValueError):
    """Raised when an arithmetic operand or result is not a finite number."""

    pass


class DivideByZeroError(FileStoreError, ZeroDivisionError):
    """Raised when dividing a stored number by zero."""

    pass


class InvalidPathError(FileStoreError, ValueError):
    """Raised when a store or backup location is missing or malformed."""

    pass


class SamePathError(InvalidPathError):
    """Raised when a backup destination is the live store itself."""

    pass


class CorruptStoreError(FileStoreError, ValueError):
    """Raised when the backing file does not hold a JSON object."""

    pass


class StorageError(FileStoreError):
    """Raised when the backing file cannot be read or written."""

    pass
