# src/ragline/config.py
"""Configuration loading utilities for ragline.

This module provides configuration loading that can be used by:
- CLI commands
- External applications using ragline as a library

It handles:
- Finding and loading ragline.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating Ragline instances from configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypedDict

import pydantic
import yaml  # type: ignore[import-untyped]

from ragline.providers.litellm.models import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from ragline.ragline import Ragline
    from ragline.settings import Settings
    from ragline.stores import SQLiteChunkStore, SQLiteDocumentStore

# Default paths
DEFAULT_DATA_DIR = "./ragline_data"
CONFIG_FILES = ["ragline.yaml", "ragline.yml", ".raglinerc"]
ENV_FILE = ".env"
ENV_PREFIX = "RAGLINE_"


class StoreBundle(TypedDict):
    """Bundle of store instances for operations that need no provider."""

    document_store: SQLiteDocumentStore
    chunk_store: SQLiteChunkStore


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("\"'")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "provider",
    "llm_model",
    "embedding_model",
    "data_dir",
    "settings",
}

INT_SETTINGS = {
    "chunk_size",
    "chunk_overlap",
    "embedding_batch_size",
    "embedding_parallelism",
    "embedding_max_attempts",
    "embedding_dimensions",
    "default_k",
    "max_k",
    "default_top_k",
    "max_tokens",
}

FLOAT_SETTINGS = {
    "embedding_retry_base_delay",
    "request_timeout",
    "temperature",
}

STR_SETTINGS = {
    "system_prompt",
    "rate_limit_profile",
}

VALID_SETTINGS_KEYS = INT_SETTINGS | FLOAT_SETTINGS | STR_SETTINGS


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from RAGLINE_* environment variables.

    Returns only values that were explicitly set, so YAML settings are used
    unless overridden by env vars. Unparseable numbers are ignored.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for key in INT_SETTINGS:
        if (val := _safe_int(os.environ.get(ENV_PREFIX + key.upper()))) is not None:
            result[key] = val
    for key in FLOAT_SETTINGS:
        if (fval := _safe_float(os.environ.get(ENV_PREFIX + key.upper()))) is not None:
            result[key] = fval
    for key in STR_SETTINGS:
        env_key = ENV_PREFIX + key.upper()
        if env_key in os.environ:
            result[key] = os.environ[env_key] or None

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance

    Raises:
        pydantic.ValidationError: If a value is out of range
        ValueError: If the rate limit profile is unknown
    """
    from ragline.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    # Merge: env vars override YAML, which overrides defaults
    merged = {**yaml_settings, **env_settings}

    # rate_limit_profile affects several settings at once
    rate_limit_profile = merged.pop("rate_limit_profile", None)

    if rate_limit_profile:
        return Settings.with_profile(rate_limit_profile, **merged)
    return Settings(**merged)


def get_stores(data_dir: str | Path) -> StoreBundle:
    """Get store instances for operations that don't call a model (list, status, delete).

    Args:
        data_dir: Path to data directory

    Returns:
        Bundle of store instances
    """
    from ragline.configuration import LocalStorage

    document_store, chunk_store = LocalStorage(str(data_dir)).build_stores()
    return {"document_store": document_store, "chunk_store": chunk_store}


def get_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Resolve the data directory: explicit > env var > yaml > default."""
    return (
        data_dir
        or os.environ.get(ENV_PREFIX + "DATA_DIR")
        or config.get("data_dir")
        or DEFAULT_DATA_DIR
    )


@dataclass
class RaglineConfig:
    """Configuration for creating a Ragline instance."""

    provider: str
    llm_model: str
    embedding_model: str
    data_dir: str
    settings: Settings
    llm_api_key: str | None = None
    embedding_api_key: str | None = None


def get_ragline_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> RaglineConfig | ConfigError:
    """Get configuration for creating a Ragline instance.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        RaglineConfig with all settings, or ConfigError if invalid
    """
    config = load_config(config_path)
    provider = config.get("provider", "litellm")

    if provider != "litellm":
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion="Supported providers: litellm",
        )

    try:
        settings = build_settings(config, get_settings_from_env())
    except (pydantic.ValidationError, ValueError) as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Check the settings: section of ragline.yaml and RAGLINE_* env vars",
        )

    llm_model = (
        os.environ.get(ENV_PREFIX + "LLM_MODEL") or config.get("llm_model") or ChatModels.GPT_4O_MINI
    )
    embedding_model = (
        os.environ.get(ENV_PREFIX + "EMBEDDING_MODEL")
        or config.get("embedding_model")
        or EmbeddingModels.TEXT_3_SMALL
    )

    return RaglineConfig(
        provider=provider,
        llm_model=llm_model,
        embedding_model=embedding_model,
        data_dir=get_data_dir(data_dir, config),
        settings=settings,
        llm_api_key=os.environ.get(ENV_PREFIX + "LLM_API_KEY"),
        embedding_api_key=os.environ.get(ENV_PREFIX + "EMBEDDING_API_KEY"),
    )


def create_ragline(config: RaglineConfig) -> Ragline:
    """Create a Ragline instance from configuration.

    Args:
        config: Configuration for the Ragline instance

    Returns:
        Configured Ragline instance
    """
    from ragline.configuration import LiteLLMProvider, LocalStorage
    from ragline.ragline import Ragline

    if config.provider != "litellm":
        raise ValueError(f"Unknown provider: {config.provider}")

    return Ragline(
        provider=LiteLLMProvider(
            llm=config.llm_model,
            embedding=config.embedding_model,
            llm_api_key=config.llm_api_key,
            embedding_api_key=config.embedding_api_key,
        ),
        storage=LocalStorage(config.data_dir),
        settings=config.settings,
    )


def get_ragline(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> Ragline | ConfigError:
    """Create a Ragline instance based on configuration.

    This is a convenience function that combines get_ragline_config and
    create_ragline. For more control, use those functions separately.
    """
    config = get_ragline_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_ragline(config)
