"""Domain models (Pydantic) and callable contracts shared across the store."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

JsonObject = dict[str, Any]

# Callback contracts. A truthy return from OnLine / OnBatch stops traversal.
OnLineCallback = Callable[[JsonObject], Any]
OnBatchCallback = Callable[[list[JsonObject]], Any]
MatchFunction = Callable[[JsonObject], Any]
UpdateFunction = Callable[[JsonObject], JsonObject]


# -------------------- Settings -------------------- #


class StoreSettings(BaseModel):
    """Tunables shared by file and collection facades."""

    batch_size: int = Field(default=1000, gt=0)
    scratch_dir: Path | None = None  # None -> stage next to the target file
    log_level: str = "INFO"


# -------------------- Scan accounting -------------------- #


class ScanStats(BaseModel):
    """Counters collected during a single pass over a file."""

    records: int = 0
    blank: int = 0
    malformed: int = 0
    non_object: int = 0

    @property
    def skipped(self) -> int:
        return self.malformed + self.non_object

    @property
    def lines(self) -> int:
        """Non-blank physical lines, valid or not."""
        return self.records + self.skipped


def is_json_object(value: Any) -> bool:
    return isinstance(value, dict)


__all__ = [
    "JsonObject",
    "MatchFunction",
    "OnBatchCallback",
    "OnLineCallback",
    "ScanStats",
    "StoreSettings",
    "UpdateFunction",
    "is_json_object",
]
