# svgmaker_mcp/validation/paths.py
"""
Path resolution and file access for tool inputs and outputs.

Provides system-directory protection, read/write access checks, and the
byte-exact file helpers used by the tools. Filesystem work runs in a worker
thread so the event loop keeps serving progress ticks.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Literal

from fastmcp.exceptions import ToolError

logger = logging.getLogger(__name__)

AccessType = Literal["read", "write"]

DENIED_PREFIXES: tuple[Path, ...] = tuple(
    Path(p) for p in ("/etc", "/bin", "/usr/bin", "/var", "/sys", "/proc")
)


def is_denied_path(path: Path) -> bool:
    """True if path is, or lives under, a protected system directory."""
    return any(path == prefix or path.is_relative_to(prefix) for prefix in DENIED_PREFIXES)


def _resolve_sync(raw_path: str, access: AccessType) -> Path:
    if not raw_path or not raw_path.strip():
        raise ToolError("Path cannot be empty")

    try:
        absolute = Path(os.path.abspath(os.path.expanduser(raw_path)))
        # Symlinks must not smuggle a path into a protected directory
        resolved = absolute.resolve()
    except (ValueError, OSError) as e:
        raise ToolError(f"Invalid path '{raw_path}': {e}")

    if is_denied_path(absolute) or is_denied_path(resolved):
        raise ToolError(f'Access to system directory "{absolute}" is not allowed.')

    if access == "write":
        directory = absolute.parent
        if absolute.is_dir():
            raise ToolError(f'Output path "{absolute}" is a directory.')
        if not directory.exists():
            try:
                directory.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created output directory: {directory}")
            except OSError:
                raise ToolError(
                    f'Directory "{directory}" is not writable and could not be created.'
                )
        if not os.access(directory, os.W_OK):
            raise ToolError(f'Directory "{directory}" is not writable.')
    else:
        if not absolute.is_file() or not os.access(absolute, os.R_OK):
            raise ToolError(f'File "{absolute}" is not readable or does not exist.')

    logger.debug(f"Validated {access} path: {absolute}")
    return absolute


async def resolve_and_validate_path(raw_path: str, access: AccessType) -> Path:
    """
    Resolve a user-supplied path and check it can be used for `access`.

    Relative paths resolve against the current working directory.

    Args:
        raw_path: User-provided path string
        access: "read" (file must exist and be readable) or "write"
            (parent directory is created if missing and must be writable)

    Returns:
        Absolute Path

    Raises:
        ToolError: If the path is protected, missing, or not accessible
    """
    return await asyncio.to_thread(_resolve_sync, raw_path, access)


async def read_file_bytes(path: Path) -> bytes:
    """Read a whole file as bytes."""
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        raise ToolError(f"Failed to read file: {path}") from e


def _write_text(path: Path, content: str) -> None:
    # newline="" keeps the markup's line endings untouched
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)


async def write_text_file(path: Path, content: str) -> None:
    """Write text as UTF-8 without re-encoding line endings."""
    try:
        await asyncio.to_thread(_write_text, path, content)
    except OSError as e:
        raise ToolError(f"Failed to write file: {path}") from e
