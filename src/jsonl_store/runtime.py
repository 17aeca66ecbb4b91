"""Runtime settings & bootstrap utilities.

Settings resolve from (lowest to highest precedence): model defaults, an
optional YAML file (``JSONL_STORE_CONFIG``), then individual env vars.
The library never bootstraps itself; the CLI (or an embedding app) does.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jsonl_store.domain.models import StoreSettings
from jsonl_store.infrastructure.logging import setup_logging

DEFAULT_CONFIG_PATH = Path("jsonl_store.yaml")

_ENV_FIELDS = {
    "JSONL_STORE_BATCH_SIZE": "batch_size",
    "JSONL_STORE_SCRATCH_DIR": "scratch_dir",
    "LOG_LEVEL": "log_level",
}


class StoreContext:
    _instance: StoreContext | None = None

    def __init__(self, settings: StoreSettings):
        self.settings = settings

    @classmethod
    def init(cls, settings: StoreSettings) -> StoreContext:
        if cls._instance is None:
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    def get(cls) -> StoreContext:
        if cls._instance is None:
            raise RuntimeError("StoreContext not initialized")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def load_settings(path: Path) -> StoreSettings:
    return StoreSettings(**_read_yaml(path))


def settings_from_env() -> StoreSettings:
    cfg_path = Path(os.getenv("JSONL_STORE_CONFIG", str(DEFAULT_CONFIG_PATH)))
    raw = _read_yaml(cfg_path)
    for env_name, field in _ENV_FIELDS.items():
        value = os.getenv(env_name)
        if value:
            raw[field] = value
    return StoreSettings(**raw)


def current_settings() -> StoreSettings:
    """Bootstrapped settings if any, otherwise defaults."""
    try:
        return StoreContext.get().settings
    except RuntimeError:
        return StoreSettings()


def bootstrap(force: bool = False) -> StoreContext:
    if not force:
        try:
            return StoreContext.get()
        except RuntimeError:
            pass
    else:
        StoreContext.reset()
    load_dotenv(override=False)
    settings = settings_from_env()
    setup_logging(settings.log_level)
    return StoreContext.init(settings)


__all__ = [
    "StoreContext",
    "bootstrap",
    "current_settings",
    "load_settings",
    "settings_from_env",
]
