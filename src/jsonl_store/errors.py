"""Exceptions raised by the store.

Filesystem failures are not wrapped: callers see the original ``OSError``.
"""
from __future__ import annotations


class JsonlStoreError(RuntimeError):
    """Base store error."""


class InvalidInputError(JsonlStoreError, ValueError):
    """Argument has the wrong shape (non-object record, bad batch size, bad name)."""


class EmptyFileError(JsonlStoreError):
    """Raised by first()/last() when the file holds no decodable records."""

    def __init__(self, path: object):
        super().__init__(f"File is empty: {path}")
        self.path = path


__all__ = ["EmptyFileError", "InvalidInputError", "JsonlStoreError"]
