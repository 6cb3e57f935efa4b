# svgmaker_mcp/services/__init__.py
"""SVGMaker API integration: client, payloads, and request throttling."""

from .client import EmptyResultError, SvgMakerAPIError, SvgMakerClient, parse_svg_result
from .rate_limiter import AsyncRateLimiter
from .types import ConvertPayload, EditPayload, GeneratePayload, SvgResult

__all__ = [
    "SvgMakerClient",
    "SvgMakerAPIError",
    "EmptyResultError",
    "parse_svg_result",
    "AsyncRateLimiter",
    "GeneratePayload",
    "EditPayload",
    "ConvertPayload",
    "SvgResult",
]
