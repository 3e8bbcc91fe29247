from pathlib import Path

import pytest

from search_cache.config import DEFAULT_CAPACITY, CacheSettings, load_cache_settings
from search_cache.errors import InvalidConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("SEARCH_CACHE_CAPACITY", raising=False)
    monkeypatch.delenv("SEARCH_CACHE_THREAD_SAFE", raising=False)


def test_missing_config_file_uses_defaults(tmp_path: Path):
    """Test that a missing file falls back to default settings"""
    settings = load_cache_settings(tmp_path / "absent.yaml")

    assert settings.capacity == DEFAULT_CAPACITY
    assert settings.thread_safe is True


def test_load_settings_from_yaml(tmp_path: Path):
    path = tmp_path / "cache.yaml"
    path.write_text("cache:\n  capacity: 25\n  thread_safe: false\n", encoding="utf-8")

    settings = load_cache_settings(path)

    assert settings.capacity == 25
    assert settings.thread_safe is False


def test_env_overrides_yaml(tmp_path: Path, monkeypatch):
    """Test that environment variables take precedence over the file"""
    path = tmp_path / "cache.yaml"
    path.write_text("cache:\n  capacity: 25\n", encoding="utf-8")
    monkeypatch.setenv("SEARCH_CACHE_CAPACITY", "64")
    monkeypatch.setenv("SEARCH_CACHE_THREAD_SAFE", "false")

    settings = load_cache_settings(path)

    assert settings.capacity == 64
    assert settings.thread_safe is False


@pytest.mark.parametrize("capacity", ["0", "-3", "lots"])
def test_invalid_env_capacity_rejected(tmp_path: Path, monkeypatch, capacity):
    monkeypatch.setenv("SEARCH_CACHE_CAPACITY", capacity)
    with pytest.raises(InvalidConfigurationError):
        load_cache_settings(tmp_path / "absent.yaml")


def test_malformed_yaml_rejected(tmp_path: Path):
    path = tmp_path / "cache.yaml"
    path.write_text("cache: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        load_cache_settings(path)


def test_non_mapping_cache_section_rejected(tmp_path: Path):
    path = tmp_path / "cache.yaml"
    path.write_text("cache:\n  - 1\n  - 2\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        load_cache_settings(path)


def test_settings_are_frozen():
    settings = CacheSettings(capacity=3)
    with pytest.raises(Exception):
        settings.capacity = 4


def test_repo_default_config_loads():
    settings = load_cache_settings()
    assert settings.capacity > 0


def test_boolean_capacity_rejected():
    with pytest.raises(Exception):
        CacheSettings(capacity=True)


def test_boolean_capacity_in_yaml_rejected(tmp_path: Path):
    path = tmp_path / "cache.yaml"
    path.write_text("cache:\n  capacity: true\n", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        load_cache_settings(path)
