# svgmaker_mcp/tools/__init__.py
"""Tool implementations shared by the MCP server and the CLI."""

from .convert import convert_image
from .edit import edit_svg
from .generate import generate_svg

__all__ = ["generate_svg", "edit_svg", "convert_image"]
