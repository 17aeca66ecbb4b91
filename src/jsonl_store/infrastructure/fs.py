"""Line store primitives: existence / emptiness checks and raw append."""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

NEWLINE = "\n"


def path_exists(path: str | Path) -> bool:
    """True if path is accessible; only a not-found condition maps to False."""
    try:
        Path(path).stat()
    except FileNotFoundError:
        return False
    return True


def is_empty_file(path: str | Path) -> bool:
    """True for a missing file, a zero-byte file, or one holding only blank lines.

    Streams the file and stops at the first non-blank line.
    """
    p = Path(path)
    try:
        if p.stat().st_size == 0:
            return True
    except FileNotFoundError:
        return True
    with p.open("r", encoding="utf-8", errors="replace", newline=None) as f:
        for line in f:
            if line.strip():
                return False
    return True


def _ends_with_newline(p: Path) -> bool:
    with p.open("rb") as f:
        f.seek(-1, 2)
        return f.read(1) in (b"\n", b"\r")


def ensure_file(path: str | Path) -> str:
    """Create the file if absent and return the separator for the next append."""
    p = Path(path)
    if not path_exists(p):
        p.parent.mkdir(parents=True, exist_ok=True)
        p.touch()
        return ""
    if is_empty_file(p):
        return ""
    # Output of newline-terminated writers already starts the next line.
    return "" if _ends_with_newline(p) else NEWLINE


def append_lines(path: str | Path, lines: Sequence[str]) -> None:
    """Append pre-serialized lines as a single write (no-op on empty input)."""
    if not lines:
        return
    separator = ensure_file(path)
    payload = separator + NEWLINE.join(lines)
    with Path(path).open("ab") as f:
        f.write(payload.encode("utf-8"))


def truncate_file(path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"")


def remove_file(path: str | Path, *, missing_ok: bool = False) -> None:
    Path(path).unlink(missing_ok=missing_ok)


__all__ = [
    "append_lines",
    "ensure_file",
    "is_empty_file",
    "path_exists",
    "remove_file",
    "truncate_file",
]
