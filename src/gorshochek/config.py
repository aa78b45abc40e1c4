"""Build configuration.

A configuration file is a JSON object, for example:

    {
        "model_path": "./model.json",
        "cache_dir": "./.builder/cache",
        "data_dir": "./data",
        "concurrency": 20,
        "host": "https://docs.example.com",
        "source": {"timeout": 10, "retry_attempts": 3}
    }
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from gorshochek.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("./.builder/cache")
DEFAULT_DATA_DIR = Path("./data")
DEFAULT_CONCURRENCY = 20
DEFAULT_PUBLISH_EXCLUDE = ["*.meta.json", "model.json", "declaration.json", "*.md"]


class SourceConfig(BaseModel):
    """Settings for the HTTP client used to fetch remote page sources."""

    timeout: float = 30
    retry_attempts: int = Field(default=3, ge=1)
    retry_delay: float = 1
    headers: dict[str, str] = {
        "User-Agent": "gorshochek/1.0",
    }


class BuildConfig(BaseModel):
    """Settings for one site build.

    Attributes:
        model_path: Declarative model file (JSON array of pages)
        cache_dir: Working directory for page content and the persisted model
        data_dir: Destination of the published site
        concurrency: Maximum number of pages processed at the same time
        host: Base URL of the site, used for sitemap locations
        publish_exclude: Glob patterns of cache files not to publish
        source: HTTP client settings for remote sources
    """

    model_path: Path
    cache_dir: Path = DEFAULT_CACHE_DIR
    data_dir: Path = DEFAULT_DATA_DIR
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    host: str | None = None
    publish_exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PUBLISH_EXCLUDE)
    )
    source: SourceConfig = Field(default_factory=SourceConfig)


def load_config(path: Path, **overrides) -> BuildConfig:
    """Load a build configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file
        **overrides: Values that take precedence over the file; ``None``
            values are ignored

    Returns:
        Validated BuildConfig

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation
    """
    try:
        data = json.loads(Path(path).read_text())
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {path}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    logger.debug(f"Loaded config from {path}")
    return make_config(data)


def make_config(data: dict) -> BuildConfig:
    """Validate a configuration dict.

    Raises:
        ConfigError: If validation fails
    """
    try:
        return BuildConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
