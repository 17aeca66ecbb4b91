"""Traversal engine: every query is a pass over the lazy record stream.

The generators (`iter_records`, `iter_batches`) are the primitive; consumers
stop early by breaking out of the loop, which closes the underlying file.
`read` / `read_by_batch` adapt that to the callback form where a truthy
return value means "stop".
"""
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from jsonl_store.domain.models import (
    JsonObject,
    MatchFunction,
    OnBatchCallback,
    OnLineCallback,
    ScanStats,
)
from jsonl_store.errors import EmptyFileError, InvalidInputError
from jsonl_store.infrastructure.reader import iter_lines, iter_records

_MISSING = object()


def strict_equals(left: Any, right: Any) -> bool:
    """Scalar equality that keeps bools apart from numbers (True does not match 1).

    Containers compare by identity, never by content.
    """
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return left is right
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def attribute_matcher(attribute: str, value: Any) -> MatchFunction:
    """Predicate: record[attribute] strictly equals value (missing never matches)."""

    def _match(record: JsonObject) -> bool:
        found = record.get(attribute, _MISSING)
        return found is not _MISSING and strict_equals(found, value)

    return _match


def validate_batch_size(batch_size: Any) -> int:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
        raise InvalidInputError(f"batch_size must be a positive integer, got {batch_size!r}")
    return batch_size


def iter_batches(path: str | Path, batch_size: int) -> Iterator[list[JsonObject]]:
    """Yield lists of up to batch_size records; the last one may be short."""
    validate_batch_size(batch_size)
    return _batches(path, batch_size)


def _batches(path: str | Path, batch_size: int) -> Iterator[list[JsonObject]]:
    batch: list[JsonObject] = []
    for record in iter_records(path):
        batch.append(record)
        if len(batch) == batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


def read(path: str | Path, on_line: OnLineCallback) -> None:
    records = iter_records(path)
    try:
        for record in records:
            if on_line(record):
                break
    finally:
        records.close()


def read_by_batch(path: str | Path, on_batch: OnBatchCallback, batch_size: int) -> None:
    batches = iter_batches(path, batch_size)
    try:
        for batch in batches:
            if on_batch(batch):
                break
    finally:
        batches.close()


def find_where(path: str | Path, attribute: str, value: Any) -> JsonObject | None:
    return find_first(path, attribute_matcher(attribute, value))


def find_first(path: str | Path, predicate: MatchFunction) -> JsonObject | None:
    records = iter_records(path)
    try:
        for record in records:
            if predicate(record):
                return record
    finally:
        records.close()
    return None


def find_match(path: str | Path, predicate: MatchFunction) -> list[JsonObject]:
    return [record for record in iter_records(path) if predicate(record)]


def count(path: str | Path) -> int:
    """Number of successfully decoded records (malformed lines excluded)."""
    return sum(1 for _ in iter_records(path))


def count_match(path: str | Path, predicate: MatchFunction) -> int:
    return sum(1 for record in iter_records(path) if predicate(record))


def count_lines(path: str | Path) -> int:
    """Number of non-blank physical lines, whether or not they decode."""
    return sum(1 for _ in iter_lines(path))


def scan_stats(path: str | Path) -> ScanStats:
    stats = ScanStats()
    for _ in iter_records(path, stats=stats):
        pass
    return stats


def first(path: str | Path) -> JsonObject:
    records = iter_records(path)
    try:
        for record in records:
            return record
    finally:
        records.close()
    raise EmptyFileError(path)


def last(path: str | Path) -> JsonObject:
    """Full O(n) scan keeping the final record."""
    found: JsonObject | None = None
    for record in iter_records(path):
        found = record
    if found is None:
        raise EmptyFileError(path)
    return found


__all__ = [
    "attribute_matcher",
    "count",
    "count_lines",
    "count_match",
    "find_first",
    "find_match",
    "find_where",
    "first",
    "iter_batches",
    "iter_records",
    "last",
    "read",
    "read_by_batch",
    "scan_stats",
    "strict_equals",
    "validate_batch_size",
]
