"""Directory-of-collections layer: one ``<root>/<name>.jsonl`` file per name.

`update` / `delete` persist through the mutation engine. The read-only
variants that only compute the outcome are `project_update` /
`project_delete`.
"""
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from jsonl_store.domain.models import (
    JsonObject,
    MatchFunction,
    StoreSettings,
    UpdateFunction,
    is_json_object,
)
from jsonl_store.errors import InvalidInputError
from jsonl_store.jsonl_file import JsonlFile, serialize
from jsonl_store.runtime import current_settings

SUFFIX = ".jsonl"

_ADD_ERROR = "add() only accepts a single json object or an array of json objects"


def _validate_name(name: str) -> str:
    if (
        not isinstance(name, str)
        or not name
        or name in (".", "..")
        or "/" in name
        or "\\" in name
    ):
        raise InvalidInputError(f"Invalid collection name: {name!r}")
    return name


class Collection:
    """Always-list-returning query API over one JsonlFile."""

    def __init__(self, name: str, file: JsonlFile):
        self.name = name
        self.file = file

    def __repr__(self) -> str:
        return f"Collection({self.name!r}, path={str(self.file.path)!r})"

    @property
    def path(self) -> Path:
        return self.file.path

    def add(self, data: JsonObject | list[JsonObject]) -> None:
        if isinstance(data, list):
            if not data:
                return
            if not all(is_json_object(o) for o in data):
                raise InvalidInputError(_ADD_ERROR)
            self.file.append_lines([serialize(o) for o in data])
            return
        if is_json_object(data):
            self.file.append_lines([serialize(data)])
            return
        raise InvalidInputError(_ADD_ERROR)

    def find_one(self, match_fn: MatchFunction) -> JsonObject | None:
        return self.file.find_first(match_fn)

    def find(self, match_fn: MatchFunction) -> list[JsonObject]:
        return self.file.find_match(match_fn)

    def count(self) -> int:
        return self.file.count()

    def update(self, match_fn: MatchFunction, update_fn: UpdateFunction) -> int:
        """Rewrite matching records on disk; returns how many were updated."""
        return self.file.update_match(match_fn, update_fn)

    def delete(self, match_fn: MatchFunction) -> int:
        """Remove matching records on disk; returns how many were deleted."""
        return self.file.delete_match(match_fn)

    def project_update(self, match_fn: MatchFunction, update_fn: UpdateFunction) -> list[JsonObject]:
        """Transformed matches, without writing anything."""
        return [update_fn(r) for r in self.file.iter_records() if match_fn(r)]

    def project_delete(self, match_fn: MatchFunction) -> list[JsonObject]:
        """Records that a delete would keep, without writing anything."""
        return [r for r in self.file.iter_records() if not match_fn(r)]


class JsonlDir:
    def __init__(self, root: str | Path, settings: StoreSettings | None = None):
        self.root = Path(root)
        self.settings = settings or current_settings()

    def __repr__(self) -> str:
        return f"JsonlDir({str(self.root)!r})"

    def path_for(self, name: str) -> Path:
        return self.root / f"{_validate_name(name)}{SUFFIX}"

    def file(self, name: str) -> Collection:
        return Collection(name, JsonlFile(self.path_for(name), self.settings))

    collection = file

    def __getitem__(self, name: str) -> Collection:
        return self.file(name)

    def iter_names(self) -> Iterator[str]:
        if not self.root.is_dir():
            return
        for p in self.root.iterdir():
            # Dot-files include in-flight scratch files from rewrites.
            if p.is_file() and p.suffix == SUFFIX and not p.name.startswith("."):
                yield p.stem

    def names(self) -> list[str]:
        return sorted(self.iter_names())

    def drop(self, name: str) -> None:
        self.file(name).file.delete_file(missing_ok=True)


__all__ = ["Collection", "JsonlDir"]
