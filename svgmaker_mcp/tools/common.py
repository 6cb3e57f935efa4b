# svgmaker_mcp/tools/common.py
"""Shared argument validation for the SVG tools."""

from collections.abc import Mapping
from typing import Any, TypeVar

from fastmcp.exceptions import ToolError
from pydantic import BaseModel, ValidationError

RequestT = TypeVar("RequestT", bound=BaseModel)


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "arguments"
        message = err["msg"].removeprefix("Value error, ")
        parts.append(f"{field}: {message}")
    return "; ".join(parts)


def validate_arguments(model: type[RequestT], arguments: Mapping[str, Any] | None) -> RequestT:
    """
    Validate raw tool arguments into a request model.

    Raises:
        ToolError: If arguments are missing or fail validation
    """
    if arguments is None:
        raise ToolError("No arguments provided")
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as e:
        raise ToolError(f"Invalid arguments: {_format_validation_error(e)}") from e
