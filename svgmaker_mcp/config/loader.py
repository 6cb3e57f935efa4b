# svgmaker_mcp/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config directory management. Non-secret
settings live in config.yaml; environment variables override them. The API
key is only ever read from the environment.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from platformdirs import user_config_path
from pydantic import ValidationError

from .schema import SvgMakerConfig

logger = logging.getLogger(__name__)

ENV_API_KEY = "SVGMAKER_API_KEY"
ENV_BASE_URL = "SVGMAKER_BASE_URL"
ENV_RATE_LIMIT = "SVGMAKER_RATE_LIMIT_RPM"
ENV_DEBUG = "SVGMAKER_DEBUG"


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path("svgmaker-mcp", ensure_exists=True)
    return config_dir / "config.yaml"


def _read_yaml(config_path: Path) -> dict:
    if not config_path.exists():
        # Create default config (api_key is excluded from dumps)
        default_config = SvgMakerConfig()
        config_dict = default_config.model_dump(mode="json")

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Created default config at {config_path}")
        return config_dict

    with config_path.open("r") as f:
        data = yaml.safe_load(f)

    logger.info(f"Loaded config from {config_path}")
    return data or {}


def _apply_env(data: dict, environ: Mapping[str, str]) -> dict:
    """Overlay environment variables onto raw config data."""
    api = dict(data.get("api") or {})
    log_cfg = dict(data.get("logging") or {})

    if environ.get(ENV_API_KEY):
        api["api_key"] = environ[ENV_API_KEY]

    if environ.get(ENV_BASE_URL):
        api["base_url"] = environ[ENV_BASE_URL]

    raw_rpm = environ.get(ENV_RATE_LIMIT)
    if raw_rpm:
        try:
            api["rate_limit_rpm"] = int(raw_rpm)
        except ValueError:
            raise ConfigError(
                f"{ENV_RATE_LIMIT} must be an integer, got: {raw_rpm!r}"
            )

    if ENV_DEBUG in environ:
        log_cfg["debug"] = environ[ENV_DEBUG].lower() == "true"

    return {**data, "api": api, "logging": log_cfg}


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> SvgMakerConfig:
    """
    Load configuration from YAML file plus environment overrides.

    If config file doesn't exist, creates it with defaults.
    Returns validated Pydantic model.

    Args:
        config_path: Override config file location (defaults to platform config dir)
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: If a setting is invalid
    """
    path = config_path or get_config_path()
    env = os.environ if environ is None else environ

    data = _apply_env(_read_yaml(path), env)

    try:
        return SvgMakerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def require_api_key(config: SvgMakerConfig) -> str:
    """
    Return the configured API key.

    Raises:
        ConfigError: If SVGMAKER_API_KEY is not set
    """
    if not config.api.api_key:
        raise ConfigError(f"{ENV_API_KEY} environment variable is required")
    return config.api.api_key
