# svgmaker_mcp/config/schema.py
"""
Pydantic configuration models for svgmaker-mcp.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://svgmaker.io/api"


class ApiConfig(BaseModel):
    """SVGMaker API connection configuration."""

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = Field(
        default=None,
        description="SVGMaker API key (read from SVGMAKER_API_KEY, never written to disk)",
        exclude=True,
        repr=False,
    )
    base_url: str = Field(default=DEFAULT_BASE_URL, description="SVGMaker API base URL")
    rate_limit_rpm: int = Field(
        default=2, ge=1, description="Maximum requests per minute sent to the API"
    )
    timeout: float = Field(
        default=60.0, gt=0.0, description="Request timeout in seconds"
    )


class ProgressConfig(BaseModel):
    """Progress notification configuration."""

    model_config = ConfigDict(extra="ignore")

    interval: float = Field(
        default=5.0,
        gt=0.0,
        description="Seconds between simulated progress updates during API calls",
    )


class LoggingConfig(BaseModel):
    """Diagnostic logging configuration."""

    model_config = ConfigDict(extra="ignore")

    debug: bool = Field(
        default=False, description="Write DEBUG logs to a file in the platform log dir"
    )


class SvgMakerConfig(BaseModel):
    """Root configuration for svgmaker-mcp."""

    model_config = ConfigDict(extra="ignore")

    api: ApiConfig = Field(default_factory=ApiConfig)
    progress: ProgressConfig = Field(default_factory=ProgressConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
