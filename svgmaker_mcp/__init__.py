# svgmaker_mcp/__init__.py
"""MCP server exposing SVGMaker generate, edit, and convert as tools."""

__version__ = "0.1.0"
