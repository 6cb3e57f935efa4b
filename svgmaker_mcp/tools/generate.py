# svgmaker_mcp/tools/generate.py
"""
svgmaker_generate tool implementation.

Validates inputs, calls the SVGMaker generate endpoint with simulated
progress, and writes the returned SVG to disk.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastmcp.exceptions import ToolError

from svgmaker_mcp.models.requests import GenerateRequest
from svgmaker_mcp.models.responses import SvgToolResponse
from svgmaker_mcp.progress import (
    DEFAULT_INTERVAL,
    GENERATE_MESSAGES,
    ProgressManager,
    ProgressSender,
    ProgressToken,
)
from svgmaker_mcp.services.client import SvgMakerClient
from svgmaker_mcp.services.types import GeneratePayload
from svgmaker_mcp.tools.common import validate_arguments
from svgmaker_mcp.validation.paths import resolve_and_validate_path, write_text_file

logger = logging.getLogger(__name__)


async def generate_svg(
    arguments: Mapping[str, Any] | None,
    *,
    client: SvgMakerClient,
    sender: ProgressSender | None = None,
    progress_token: ProgressToken | None = None,
    progress_interval: float = DEFAULT_INTERVAL,
) -> dict:
    """
    Generate an SVG from a text prompt and save it locally.

    Args:
        arguments: Raw tool arguments (prompt, output_path, quality,
            aspectRatio, background, style options)
        client: SVGMaker API client
        sender: Progress notification sender
        progress_token: Caller's progress token (None disables notifications)
        progress_interval: Seconds between simulated processing updates

    Returns:
        SvgToolResponse as dict

    Raises:
        ToolError: On any failure, prefixed with "Error generating SVG:"
    """
    progress: ProgressManager | None = None
    try:
        request = validate_arguments(GenerateRequest, arguments)
        output_path = await resolve_and_validate_path(request.output_path, "write")

        progress = ProgressManager(
            sender, progress_token, GENERATE_MESSAGES, interval=progress_interval
        )
        await progress.send_initial_progress()

        payload = GeneratePayload.from_request(request)
        logger.info(
            f"Generating SVG: quality={payload.quality}, "
            f"aspect_ratio={payload.aspect_ratio}, background={payload.background}"
        )
        await progress.send_preparing_progress()

        await progress.start_processing_progress()
        result = await client.generate(payload)

        await progress.send_saving_progress()
        await write_text_file(output_path, result.svg_text)
        await progress.send_final_progress()
    except Exception as e:
        logger.error(f"svgmaker_generate failed: {e}")
        raise ToolError(f"Error generating SVG: {e}") from e
    finally:
        # Also runs on cancellation, which the except clause does not catch
        if progress is not None:
            progress.cleanup()

    logger.info(f"SVG generated and saved to {output_path}")
    response = SvgToolResponse(
        output_path=str(output_path),
        message=f"SVG generated successfully and saved to: {output_path}",
        svg_url=result.svg_url,
        credit_cost=result.credit_cost,
    )
    return response.model_dump()
