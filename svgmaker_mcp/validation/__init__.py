# svgmaker_mcp/validation/__init__.py
"""Path validation and file access utilities."""

from .paths import (
    DENIED_PREFIXES,
    is_denied_path,
    read_file_bytes,
    resolve_and_validate_path,
    write_text_file,
)

__all__ = [
    "DENIED_PREFIXES",
    "is_denied_path",
    "resolve_and_validate_path",
    "read_file_bytes",
    "write_text_file",
]
