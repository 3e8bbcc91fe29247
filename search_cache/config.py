from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000
_CAPACITY_ENV = "SEARCH_CACHE_CAPACITY"
_THREAD_SAFE_ENV = "SEARCH_CACHE_THREAD_SAFE"


def _repo_root() -> Path:
    # .../search_cache/config.py -> parents[1] is repo root
    return Path(__file__).resolve().parents[1]


DEFAULT_CONFIG_PATH = _repo_root() / "config" / "search_cache.yaml"


class CacheSettings(BaseModel):
    """Validated, immutable cache settings."""

    model_config = {"frozen": True}

    capacity: int = Field(default=DEFAULT_CAPACITY, gt=0, description="Maximum number of cached keys")
    thread_safe: bool = Field(default=True, description="Guard every operation with a lock")

    @field_validator("capacity", mode="before")
    @classmethod
    def capacity_must_not_be_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("capacity must be an integer, not a boolean")
        return v


def _load_yaml_section(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s. Using default cache settings.", path)
        return {}

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"failed to parse config file {path}: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidConfigurationError(f"config file {path} must contain a mapping")
    section = payload.get("cache") or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError("config.cache must be an object")
    logger.debug("Loaded cache config from %s", path)
    return dict(section)


def load_cache_settings(config_path: str | Path | None = None) -> CacheSettings:
    """Load cache settings from YAML, with environment variable overrides."""
    load_dotenv()
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    values = _load_yaml_section(path)

    capacity = os.getenv(_CAPACITY_ENV)
    if capacity:
        values["capacity"] = capacity
    thread_safe = os.getenv(_THREAD_SAFE_ENV)
    if thread_safe:
        values["thread_safe"] = thread_safe

    try:
        return CacheSettings(**values)
    except ValidationError as e:
        raise InvalidConfigurationError(f"invalid cache settings: {e}") from e
