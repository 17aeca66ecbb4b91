"""Tests for settings loading and bootstrap."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from jsonl_store.domain.models import StoreSettings
from jsonl_store.jsonl_file import JsonlFile
from jsonl_store.runtime import (
    StoreContext,
    bootstrap,
    current_settings,
    load_settings,
    settings_from_env,
)


def test_defaults():
    s = StoreSettings()
    assert s.batch_size == 1000
    assert s.scratch_dir is None
    assert s.log_level == "INFO"


def test_batch_size_must_be_positive():
    with pytest.raises(ValidationError):
        StoreSettings(batch_size=0)


def test_load_settings_from_yaml(tmp_path):
    cfg = tmp_path / "store.yaml"
    cfg.write_text("batch_size: 50\nscratch_dir: /tmp/scratch\n")
    s = load_settings(cfg)
    assert s.batch_size == 50
    assert s.scratch_dir == Path("/tmp/scratch")


def test_load_settings_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "none.yaml") == StoreSettings()


def test_load_settings_rejects_non_mapping(tmp_path):
    cfg = tmp_path / "store.yaml"
    cfg.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(cfg)


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "store.yaml"
    cfg.write_text("batch_size: 50\nlog_level: DEBUG\n")
    monkeypatch.setenv("JSONL_STORE_CONFIG", str(cfg))
    monkeypatch.setenv("JSONL_STORE_BATCH_SIZE", "7")
    s = settings_from_env()
    assert s.batch_size == 7
    assert s.log_level == "DEBUG"


def test_bootstrap_caches_context(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("JSONL_STORE_BATCH_SIZE", "3")
    ctx = bootstrap()
    assert bootstrap() is ctx
    assert StoreContext.get().settings.batch_size == 3
    assert current_settings().batch_size == 3
    assert JsonlFile(tmp_path / "x.jsonl").settings.batch_size == 3


def test_current_settings_without_bootstrap():
    assert current_settings() == StoreSettings()
