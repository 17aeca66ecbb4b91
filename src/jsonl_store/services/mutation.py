"""Mutation engine: update / delete via copy-rewrite.

JSONL records have no fixed width, so a changed record cannot be patched in
place. Instead the source is streamed through a transform into a scratch file
which then replaces the source with ``os.replace``. That rename is the only
commit point: any failure before it leaves the source untouched, and the
scratch path is removed on every exit.

Untouched records are written back using their original line text; malformed
lines are not carried over.
"""
from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

import orjson

from jsonl_store.domain.models import (
    JsonObject,
    MatchFunction,
    ScanStats,
    UpdateFunction,
    is_json_object,
)
from jsonl_store.errors import InvalidInputError
from jsonl_store.infrastructure.fs import path_exists
from jsonl_store.infrastructure.reader import iter_raw_records
from jsonl_store.infrastructure.scratch import scratch_path
from jsonl_store.services.traversal import attribute_matcher

logger = logging.getLogger(__name__)


class Action(Enum):
    KEEP = "keep"
    DROP = "drop"


KEEP = Action.KEEP
DROP = Action.DROP

Transform = Callable[[JsonObject], JsonObject | Action]


def rewrite(
    path: str | Path,
    transform: Transform,
    *,
    scratch_dir: str | Path | None = None,
) -> int:
    """Stream path through transform and swap the result in.

    Returns how many records were replaced or dropped. A missing source is a
    no-op (the file is not created).
    """
    target = Path(path)
    if not path_exists(target):
        return 0
    stats = ScanStats()
    changed = 0
    with scratch_path(directory=scratch_dir or target.parent, suffix=".jsonl") as tmp:
        with tmp.open("wb") as out:
            wrote_any = False
            for text, record in iter_raw_records(target, stats=stats):
                result = transform(record)
                if result is DROP:
                    changed += 1
                    continue
                if result is KEEP:
                    line = text.encode("utf-8")
                else:
                    if not is_json_object(result):
                        raise InvalidInputError(
                            f"update function must return a json object, got {type(result).__name__}"
                        )
                    line = orjson.dumps(result)
                    changed += 1
                if wrote_any:
                    out.write(b"\n")
                out.write(line)
                wrote_any = True
        shutil.copymode(target, tmp)
        os.replace(tmp, target)
    if stats.skipped:
        logger.warning(
            "Dropped %d undecodable line(s) while rewriting %s", stats.skipped, target
        )
    logger.debug("Rewrote %s: %d record(s) changed", target, changed)
    return changed


def _updating(predicate: MatchFunction, update_fn: UpdateFunction) -> Transform:
    def _transform(record: JsonObject) -> Any:
        return update_fn(record) if predicate(record) else KEEP

    return _transform


def _deleting(predicate: MatchFunction) -> Transform:
    def _transform(record: JsonObject) -> Action:
        return DROP if predicate(record) else KEEP

    return _transform


def update_match(
    path: str | Path,
    predicate: MatchFunction,
    update_fn: UpdateFunction,
    *,
    scratch_dir: str | Path | None = None,
) -> int:
    return rewrite(path, _updating(predicate, update_fn), scratch_dir=scratch_dir)


def update_where(
    path: str | Path,
    attribute: str,
    value: Any,
    update_fn: UpdateFunction,
    *,
    scratch_dir: str | Path | None = None,
) -> int:
    return update_match(path, attribute_matcher(attribute, value), update_fn, scratch_dir=scratch_dir)


def delete_match(
    path: str | Path,
    predicate: MatchFunction,
    *,
    scratch_dir: str | Path | None = None,
) -> int:
    return rewrite(path, _deleting(predicate), scratch_dir=scratch_dir)


def delete_where(
    path: str | Path,
    attribute: str,
    value: Any,
    *,
    scratch_dir: str | Path | None = None,
) -> int:
    return delete_match(path, attribute_matcher(attribute, value), scratch_dir=scratch_dir)


__all__ = [
    "DROP",
    "KEEP",
    "Action",
    "delete_match",
    "delete_where",
    "rewrite",
    "update_match",
    "update_where",
]
