"""Exceptions raised by key-value store backends."""

from __future__ import annotations


class StoreError(Exception):
    """Raised when the key-value store cannot be read or written."""

    def __init__(self, message: str = "Key-value store is unavailable"):
        super().__init__(message)
