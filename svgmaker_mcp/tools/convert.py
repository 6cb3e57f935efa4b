# svgmaker_mcp/tools/convert.py
"""
svgmaker_convert tool implementation.

Converts a raster image to SVG through SVGMaker and writes the result.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastmcp.exceptions import ToolError

from svgmaker_mcp.models.requests import ConvertRequest
from svgmaker_mcp.models.responses import SvgToolResponse
from svgmaker_mcp.progress import (
    CONVERT_MESSAGES,
    DEFAULT_INTERVAL,
    ProgressManager,
    ProgressSender,
    ProgressToken,
)
from svgmaker_mcp.services.client import SvgMakerClient
from svgmaker_mcp.services.types import ConvertPayload
from svgmaker_mcp.tools.common import validate_arguments
from svgmaker_mcp.validation.paths import (
    read_file_bytes,
    resolve_and_validate_path,
    write_text_file,
)

logger = logging.getLogger(__name__)


async def convert_image(
    arguments: Mapping[str, Any] | None,
    *,
    client: SvgMakerClient,
    sender: ProgressSender | None = None,
    progress_token: ProgressToken | None = None,
    progress_interval: float = DEFAULT_INTERVAL,
) -> dict:
    """
    Convert an image file to SVG and save it locally.

    Raises:
        ToolError: On any failure, prefixed with "Error converting image to SVG:"
    """
    progress: ProgressManager | None = None
    try:
        request = validate_arguments(ConvertRequest, arguments)
        input_path = await resolve_and_validate_path(request.input_path, "read")
        output_path = await resolve_and_validate_path(request.output_path, "write")

        progress = ProgressManager(
            sender, progress_token, CONVERT_MESSAGES, interval=progress_interval
        )
        await progress.send_initial_progress()

        image = await read_file_bytes(input_path)
        payload = ConvertPayload.from_request(request, image, input_path.name)
        await progress.send_preparing_progress()

        await progress.start_processing_progress()
        result = await client.convert(payload)

        await progress.send_saving_progress()
        await write_text_file(output_path, result.svg_text)
        await progress.send_final_progress()
    except Exception as e:
        logger.error(f"svgmaker_convert failed: {e}")
        raise ToolError(f"Error converting image to SVG: {e}") from e
    finally:
        # Also runs on cancellation, which the except clause does not catch
        if progress is not None:
            progress.cleanup()

    logger.info(f"Image converted and saved to {output_path}")
    response = SvgToolResponse(
        output_path=str(output_path),
        message=f"Image converted to SVG successfully: {output_path}",
        svg_url=result.svg_url,
        credit_cost=result.credit_cost,
    )
    return response.model_dump()
