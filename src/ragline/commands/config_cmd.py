# src/ragline/commands/config_cmd.py
"""Config command - display current configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pydantic

from ragline.commands.base import ConfigResult, SettingInfo
from ragline.config import (
    ENV_PREFIX,
    VALID_SETTINGS_KEYS,
    build_settings,
    find_config_file,
    get_data_dir,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    validate_config,
)
from ragline.providers.litellm.models import ChatModels, EmbeddingModels


def _get_setting_source(key: str, yaml_settings: dict, env_settings: dict) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    return "default"


def config(config_path: str | Path | None = None) -> ConfigResult:
    """Get current configuration settings and where each value came from."""
    found_config_path = Path(config_path) if config_path is not None else find_config_file()
    cli_config = load_config(found_config_path) if found_config_path else {}
    env_settings = get_settings_from_env()
    yaml_settings = get_settings_from_yaml(cli_config)

    result = ConfigResult(success=True)
    result.config_path = str(found_config_path) if found_config_path else None
    result.warnings = validate_config(cli_config, found_config_path)

    try:
        settings = build_settings(cli_config, env_settings)
    except (pydantic.ValidationError, ValueError) as e:
        result.fail(f"Invalid settings: {e}", kind="invalid")
        return result

    result.provider = cli_config.get("provider", "litellm")
    result.llm_model = (
        os.environ.get(ENV_PREFIX + "LLM_MODEL")
        or cli_config.get("llm_model")
        or ChatModels.GPT_4O_MINI
    )
    result.embedding_model = (
        os.environ.get(ENV_PREFIX + "EMBEDDING_MODEL")
        or cli_config.get("embedding_model")
        or EmbeddingModels.TEXT_3_SMALL
    )
    result.data_dir = get_data_dir(None, cli_config)

    values = settings.model_dump()
    for key in sorted(VALID_SETTINGS_KEYS - {"rate_limit_profile"}):
        value = values[key]
        result.settings.append(
            SettingInfo(
                name=key,
                value="(not set)" if value is None else str(value),
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    return result
