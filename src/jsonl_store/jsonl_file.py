"""Single-file facade binding one JSONL path to the traversal & mutation engines.

Usage:
    users = JsonlFile("data/users.jsonl")
    users.add({"name": "Alice", "age": 25})
    users.update_where("name", "Alice", lambda r: {**r, "age": 26})
    for batch in users.iter_batches(500):
        ...
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import orjson

from jsonl_store.domain.models import (
    JsonObject,
    MatchFunction,
    OnBatchCallback,
    OnLineCallback,
    ScanStats,
    StoreSettings,
    UpdateFunction,
    is_json_object,
)
from jsonl_store.errors import InvalidInputError
from jsonl_store.infrastructure import fs, reader
from jsonl_store.runtime import current_settings
from jsonl_store.services import mutation, traversal


def serialize(record: JsonObject) -> str:
    return orjson.dumps(record).decode("utf-8")


class JsonlFile:
    def __init__(self, path: str | Path, settings: StoreSettings | None = None):
        self._path = Path(path)
        self.settings = settings or current_settings()

    def __repr__(self) -> str:
        return f"JsonlFile({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    # -------------------- line store -------------------- #

    def exists(self) -> bool:
        return fs.path_exists(self._path)

    def is_empty(self) -> bool:
        return fs.is_empty_file(self._path)

    def ensure(self) -> str:
        return fs.ensure_file(self._path)

    def append_lines(self, lines: Sequence[str]) -> None:
        fs.append_lines(self._path, lines)

    def add(self, obj: JsonObject) -> None:
        if not is_json_object(obj):
            raise InvalidInputError("add() only accepts a single json object")
        self.append_lines([serialize(obj)])

    def add_many(self, objs: Sequence[JsonObject]) -> None:
        if not isinstance(objs, (list, tuple)):
            raise InvalidInputError("add_many() only accepts an array of json objects")
        if not objs:
            return
        if not all(is_json_object(o) for o in objs):
            raise InvalidInputError("add_many() only accepts an array of json objects")
        self.append_lines([serialize(o) for o in objs])

    def clear(self) -> None:
        fs.truncate_file(self._path)

    def delete_file(self, *, missing_ok: bool = False) -> None:
        fs.remove_file(self._path, missing_ok=missing_ok)

    # -------------------- traversal -------------------- #

    def iter_records(self) -> Iterator[JsonObject]:
        return reader.iter_records(self._path)

    def iter_batches(self, batch_size: int | None = None) -> Iterator[list[JsonObject]]:
        if batch_size is None:
            batch_size = self.settings.batch_size
        return traversal.iter_batches(self._path, batch_size)

    def read(self, on_line: OnLineCallback) -> None:
        traversal.read(self._path, on_line)

    def read_by_batch(self, on_batch: OnBatchCallback, batch_size: int | None = None) -> None:
        if batch_size is None:
            batch_size = self.settings.batch_size
        traversal.read_by_batch(self._path, on_batch, batch_size)

    def first(self) -> JsonObject:
        return traversal.first(self._path)

    def last(self) -> JsonObject:
        return traversal.last(self._path)

    def find_where(self, attribute: str, value: Any) -> JsonObject | None:
        return traversal.find_where(self._path, attribute, value)

    def find_first(self, predicate: MatchFunction) -> JsonObject | None:
        return traversal.find_first(self._path, predicate)

    def find_match(self, predicate: MatchFunction) -> list[JsonObject]:
        return traversal.find_match(self._path, predicate)

    def count(self) -> int:
        return traversal.count(self._path)

    def count_match(self, predicate: MatchFunction) -> int:
        return traversal.count_match(self._path, predicate)

    def count_lines(self) -> int:
        return traversal.count_lines(self._path)

    def scan_stats(self) -> ScanStats:
        return traversal.scan_stats(self._path)

    # -------------------- mutation -------------------- #

    def update_where(self, attribute: str, value: Any, update_fn: UpdateFunction) -> int:
        return mutation.update_where(
            self._path, attribute, value, update_fn, scratch_dir=self.settings.scratch_dir
        )

    def update_match(self, predicate: MatchFunction, update_fn: UpdateFunction) -> int:
        return mutation.update_match(
            self._path, predicate, update_fn, scratch_dir=self.settings.scratch_dir
        )

    def delete_where(self, attribute: str, value: Any) -> int:
        return mutation.delete_where(
            self._path, attribute, value, scratch_dir=self.settings.scratch_dir
        )

    def delete_match(self, predicate: MatchFunction) -> int:
        return mutation.delete_match(self._path, predicate, scratch_dir=self.settings.scratch_dir)


__all__ = ["JsonlFile", "serialize"]
