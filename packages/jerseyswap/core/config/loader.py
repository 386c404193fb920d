"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from jerseyswap.core.config.models import AppConfig, ProviderType

logger = logging.getLogger(__name__)

# Default app config path (can be overridden)
_DEFAULT_APP_CONFIG_PATH = Path("config.json")

# Environment variables checked for each provider's credential, in priority order
CREDENTIAL_ENV_VARS: dict[ProviderType, tuple[str, ...]] = {
    ProviderType.GEMINI: ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    ProviderType.OPENAI: ("OPENAI_API_KEY",),
}


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("config.json")
        'json'
        >>> detect_format("config.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
            # safe_load returns None for empty files
            return content if content is not None else {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Supports both JSON and YAML formats. The provider credential is loaded
    from the environment when the config value is None.

    Args:
        path: Path to app config file (.json, .yaml, or .yml)
              Defaults to config.json

    Returns:
        Validated AppConfig instance with defaults for missing values

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH

    if Path(path).exists():
        raw_config = load_config(path)
        config = AppConfig.model_validate(raw_config)
    else:
        logger.debug("No app config at %s, using defaults", path)
        config = AppConfig()

    return _load_env_vars_into_config(config)


def _load_env_vars_into_config(config: AppConfig) -> AppConfig:
    """Fill the generation credential from the environment when unset.

    Args:
        config: AppConfig instance to populate

    Returns:
        Config with the credential applied (same instance if nothing changed)
    """
    generation = config.generation
    if generation.api_key is not None:
        return config

    for env_var in CREDENTIAL_ENV_VARS.get(generation.provider, ()):
        value = os.getenv(env_var)
        if value:
            logger.debug(f"Loaded {env_var} from environment")
            return config.model_copy(
                update={"generation": generation.model_copy(update={"api_key": value})}
            )

    return config
