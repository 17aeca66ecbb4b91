"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from jsonl_store.infrastructure.logging import reset_logging
from jsonl_store.runtime import StoreContext


@pytest.fixture(autouse=True)
def clean_runtime(monkeypatch):
    """Keep bootstrap state and env-driven settings from leaking between tests."""
    for name in ("JSONL_STORE_CONFIG", "JSONL_STORE_BATCH_SIZE", "JSONL_STORE_SCRATCH_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    StoreContext.reset()
    reset_logging()
    yield
    StoreContext.reset()
    reset_logging()


@pytest.fixture
def jsonl_path(tmp_path: Path) -> Path:
    return tmp_path / "data.jsonl"


@pytest.fixture
def write_text():
    """Write raw text to a path (no normalization of newlines)."""

    def _write(path: Path, text: str) -> Path:
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
