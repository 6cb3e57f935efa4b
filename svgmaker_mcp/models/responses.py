# svgmaker_mcp/models/responses.py
"""
Pydantic response models for tool outputs.

All tools return the same structured response on success.
"""

from pydantic import BaseModel, Field


class SvgToolResponse(BaseModel):
    """Successful result of generate/edit/convert."""

    output_path: str = Field(description="Absolute path of the written SVG file")
    message: str = Field(description="Human-readable confirmation")
    svg_url: str | None = Field(
        default=None, description="Hosted SVG URL returned by the API, if any"
    )
    credit_cost: float | None = Field(
        default=None, description="Credits charged by the API, if reported"
    )
