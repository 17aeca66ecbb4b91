"""Scratch paths for copy-rewrite staging.

A scratch path is generated up front (no file is created) and removed on every
exit path. The staged file is usually consumed by a rename, so an already-gone
path counts as cleaned up.
"""
from __future__ import annotations

import logging
import secrets
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def generate_scratch_path(directory: str | Path | None = None, suffix: str = "") -> Path:
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    if suffix and not suffix.startswith("."):
        suffix = f".{suffix}"
    return base / f".{secrets.token_hex(16)}{suffix}"


@contextmanager
def scratch_path(*, directory: str | Path | None = None, suffix: str = "") -> Iterator[Path]:
    """Yield a unique path and delete whatever is left there afterwards."""
    path = generate_scratch_path(directory, suffix)
    try:
        yield path
    finally:
        try:
            with suppress(FileNotFoundError):
                path.unlink()
        except OSError as exc:
            logger.error("Failed to delete scratch file %s: %s", path, exc)


def temporary_file_task(
    task: Callable[[Path], T],
    *,
    directory: str | Path | None = None,
    suffix: str = "",
) -> T:
    """Run task(path) with a scratch path and return its result."""
    with scratch_path(directory=directory, suffix=suffix) as path:
        return task(path)


__all__ = ["generate_scratch_path", "scratch_path", "temporary_file_task"]
