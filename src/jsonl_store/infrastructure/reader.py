"""Streaming JSONL reader.

Each call opens a fresh forward-only stream. Generators close their handle on
exhaustion, on ``close()`` (early break) and on error, so abandoning one midway
is safe.

Lines that do not decode to a JSON object are logged and skipped; they stay in
the file until a mutation rewrites it.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import orjson

from jsonl_store.domain.models import JsonObject, ScanStats, is_json_object

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 100


def iter_lines(path: str | Path, *, stats: ScanStats | None = None) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, stripped text) for every non-blank line."""
    p = Path(path)
    try:
        f = p.open("r", encoding="utf-8", errors="surrogateescape", newline=None)
    except FileNotFoundError:
        return
    with f:
        for lineno, line in enumerate(f, start=1):
            text = line.strip()
            if not text:
                if stats is not None:
                    stats.blank += 1
                continue
            yield lineno, text


def _decode(path: Path, lineno: int, text: str, stats: ScanStats | None) -> JsonObject | None:
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError:
        logger.warning(
            "Skipping invalid JSON line %d in %s: %s", lineno, path, text[:_PREVIEW_CHARS]
        )
        if stats is not None:
            stats.malformed += 1
        return None
    if not is_json_object(value):
        logger.warning(
            "Skipping non-object JSON line %d in %s: %s", lineno, path, text[:_PREVIEW_CHARS]
        )
        if stats is not None:
            stats.non_object += 1
        return None
    if stats is not None:
        stats.records += 1
    return value


def iter_raw_records(
    path: str | Path, *, stats: ScanStats | None = None
) -> Iterator[tuple[str, JsonObject]]:
    """Yield (original line text, decoded record) pairs in file order."""
    p = Path(path)
    for lineno, text in iter_lines(p, stats=stats):
        record = _decode(p, lineno, text, stats)
        if record is not None:
            yield text, record


def iter_records(path: str | Path, *, stats: ScanStats | None = None) -> Iterator[JsonObject]:
    """Yield decoded records in file order (missing file -> nothing)."""
    for _text, record in iter_raw_records(path, stats=stats):
        yield record


__all__ = ["iter_lines", "iter_raw_records", "iter_records"]
