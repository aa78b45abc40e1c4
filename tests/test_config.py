"""Tests for build configuration loading."""

import json
from pathlib import Path

import pytest

from gorshochek.config import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CONCURRENCY,
    BuildConfig,
    load_config,
    make_config,
)
from gorshochek.exceptions import ConfigError


class TestBuildConfig:
    """Tests for BuildConfig defaults and validation."""

    def test_defaults(self):
        """Only model_path is required."""
        config = make_config({"model_path": "model.json"})

        assert config.model_path == Path("model.json")
        assert config.cache_dir == DEFAULT_CACHE_DIR
        assert config.concurrency == DEFAULT_CONCURRENCY == 20
        assert config.host is None
        assert "*.md" in config.publish_exclude
        assert config.source.retry_attempts == 3

    def test_publish_exclude_not_shared(self):
        """Each config gets its own exclude list."""
        first = make_config({"model_path": "a.json"})
        first.publish_exclude.append("*.tmp")
        second = make_config({"model_path": "b.json"})

        assert "*.tmp" not in second.publish_exclude

    def test_missing_model_path(self):
        """A config without model_path is invalid."""
        with pytest.raises(ConfigError, match="Invalid configuration"):
            make_config({})

    def test_concurrency_must_be_positive(self):
        """concurrency below 1 is invalid."""
        with pytest.raises(ConfigError):
            make_config({"model_path": "model.json", "concurrency": 0})

    def test_source_settings(self):
        """Nested source settings are validated."""
        config = make_config({
            "model_path": "model.json",
            "source": {"timeout": 5, "headers": {"Authorization": "token x"}},
        })

        assert config.source.timeout == 5
        assert config.source.headers == {"Authorization": "token x"}

    def test_is_pydantic_model(self):
        """make_config returns a BuildConfig."""
        assert isinstance(make_config({"model_path": "m.json"}), BuildConfig)


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_from_file(self, tmp_path):
        """Values are read from the JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "model_path": "model.json",
            "host": "https://docs.example.com",
            "concurrency": 4,
        }))

        config = load_config(path)

        assert config.host == "https://docs.example.com"
        assert config.concurrency == 4

    def test_overrides_take_precedence(self, tmp_path):
        """Non-None overrides replace file values."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"model_path": "model.json", "concurrency": 4}))

        config = load_config(path, concurrency=8, host=None)

        assert config.concurrency == 8
        assert config.host is None

    def test_missing_file(self, tmp_path):
        """A missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Unparsable JSON raises ConfigError."""
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_non_object(self, tmp_path):
        """A JSON array is not a valid config."""
        path = tmp_path / "config.json"
        path.write_text("[]")

        with pytest.raises(ConfigError, match="JSON object"):
            load_config(path)
