"""Application configuration models and loaders."""

from jerseyswap.core.config.loader import load_app_config, load_config
from jerseyswap.core.config.models import (
    AppConfig,
    GenerationConfig,
    LoggingConfig,
    ProviderType,
    WorkflowConfig,
)

__all__ = [
    "AppConfig",
    "GenerationConfig",
    "LoggingConfig",
    "ProviderType",
    "WorkflowConfig",
    "load_app_config",
    "load_config",
]
