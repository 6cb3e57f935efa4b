# svgmaker_mcp/tools/edit.py
"""
svgmaker_edit tool implementation.

Reads an existing image/SVG, sends it with an edit prompt to SVGMaker, and
writes the edited SVG to disk.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastmcp.exceptions import ToolError

from svgmaker_mcp.models.requests import EditRequest
from svgmaker_mcp.models.responses import SvgToolResponse
from svgmaker_mcp.progress import (
    DEFAULT_INTERVAL,
    EDIT_MESSAGES,
    ProgressManager,
    ProgressSender,
    ProgressToken,
)
from svgmaker_mcp.services.client import SvgMakerClient
from svgmaker_mcp.services.types import EditPayload
from svgmaker_mcp.tools.common import validate_arguments
from svgmaker_mcp.validation.paths import (
    read_file_bytes,
    resolve_and_validate_path,
    write_text_file,
)

logger = logging.getLogger(__name__)


async def edit_svg(
    arguments: Mapping[str, Any] | None,
    *,
    client: SvgMakerClient,
    sender: ProgressSender | None = None,
    progress_token: ProgressToken | None = None,
    progress_interval: float = DEFAULT_INTERVAL,
) -> dict:
    """
    Edit an existing image/SVG based on a prompt and save the result.

    Args:
        arguments: Raw tool arguments (input_path, prompt, output_path,
            quality, aspectRatio, background, style options)
        client: SVGMaker API client
        sender: Progress notification sender
        progress_token: Caller's progress token (None disables notifications)
        progress_interval: Seconds between simulated processing updates

    Returns:
        SvgToolResponse as dict

    Raises:
        ToolError: On any failure, prefixed with "Error editing SVG:"
    """
    progress: ProgressManager | None = None
    try:
        request = validate_arguments(EditRequest, arguments)
        input_path = await resolve_and_validate_path(request.input_path, "read")
        output_path = await resolve_and_validate_path(request.output_path, "write")

        progress = ProgressManager(
            sender, progress_token, EDIT_MESSAGES, interval=progress_interval
        )
        await progress.send_initial_progress()

        image = await read_file_bytes(input_path)
        payload = EditPayload.from_request(request, image, input_path.name)
        logger.info(
            f"Editing {input_path} ({len(image)} bytes): quality={payload.quality}, "
            f"aspect_ratio={payload.aspect_ratio}, background={payload.background}"
        )
        await progress.send_preparing_progress()

        await progress.start_processing_progress()
        result = await client.edit(payload)

        await progress.send_saving_progress()
        await write_text_file(output_path, result.svg_text)
        await progress.send_final_progress()
    except Exception as e:
        logger.error(f"svgmaker_edit failed: {e}")
        raise ToolError(f"Error editing SVG: {e}") from e
    finally:
        # Also runs on cancellation, which the except clause does not catch
        if progress is not None:
            progress.cleanup()

    logger.info(f"SVG edited and saved to {output_path}")
    response = SvgToolResponse(
        output_path=str(output_path),
        message=f"SVG edited successfully and saved to: {output_path}",
        svg_url=result.svg_url,
        credit_cost=result.credit_cost,
    )
    return response.model_dump()
