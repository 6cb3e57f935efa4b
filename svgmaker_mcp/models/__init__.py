# svgmaker_mcp/models/__init__.py
"""
Data models for svgmaker-mcp.

Provides validated tool request models and the shared response model.
"""

from svgmaker_mcp.models.requests import (
    ConvertRequest,
    EditRequest,
    GenerateRequest,
    resolve_aspect_ratio,
)
from svgmaker_mcp.models.responses import SvgToolResponse

__all__ = [
    # Request models
    "GenerateRequest",
    "EditRequest",
    "ConvertRequest",
    "resolve_aspect_ratio",
    # Response models
    "SvgToolResponse",
]
