"""Line-oriented JSON persistence (one JSON object per line)."""

from jsonl_store.collection import Collection, JsonlDir
from jsonl_store.errors import EmptyFileError, InvalidInputError, JsonlStoreError
from jsonl_store.jsonl_file import JsonlFile

__all__ = [
    "Collection",
    "EmptyFileError",
    "InvalidInputError",
    "JsonlDir",
    "JsonlFile",
    "JsonlStoreError",
]
