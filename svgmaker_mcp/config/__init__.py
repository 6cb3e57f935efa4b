# svgmaker_mcp/config/__init__.py
"""Configuration system for svgmaker-mcp."""

from .loader import ConfigError, get_config_path, load_config, require_api_key
from .schema import (
    DEFAULT_BASE_URL,
    ApiConfig,
    LoggingConfig,
    ProgressConfig,
    SvgMakerConfig,
)

__all__ = [
    "SvgMakerConfig",
    "ApiConfig",
    "ProgressConfig",
    "LoggingConfig",
    "DEFAULT_BASE_URL",
    "ConfigError",
    "load_config",
    "get_config_path",
    "require_api_key",
]
