"""Configuration models and the lazily-loaded global settings."""

from .config import (
    Config,
    ExtractionSettings,
    ModelConfig,
    MonitoringConfig,
    SanitizerConfig,
    StorageConfig,
    find_config_file,
    settings,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "ModelConfig",
    "MonitoringConfig",
    "SanitizerConfig",
    "StorageConfig",
    "find_config_file",
    "settings",
]
