# svgmaker_mcp/server.py
"""
FastMCP server construction with tool registration.

CRITICAL: configure_logging() is called first to prevent stdout pollution.
All logging goes to stderr as JSON.
"""

# Configure logging FIRST before any other imports
from svgmaker_mcp.logging_config import configure_logging

configure_logging()

# Now safe to import everything else
import logging
from typing import Annotated, get_args

from fastmcp import Context, FastMCP
from pydantic import Field

from svgmaker_mcp.config.schema import SvgMakerConfig
from svgmaker_mcp.models.requests import (
    Background,
    ColorMode,
    Composition,
    EditAspectRatio,
    GenerateAspectRatio,
    ImageComplexity,
    Quality,
    Style,
    TextStyle,
)
from svgmaker_mcp.progress import ProgressSender, ProgressToken
from svgmaker_mcp.services.client import SvgMakerClient
from svgmaker_mcp.tools.convert import convert_image as _convert_image
from svgmaker_mcp.tools.edit import edit_svg as _edit_svg
from svgmaker_mcp.tools.generate import generate_svg as _generate_svg

logger = logging.getLogger(__name__)

SERVER_NAME = "svgmaker-mcp"


def _choices(options) -> str:
    return ", ".join(repr(o) for o in get_args(options))


# Protocol parameters are loosely typed; the request models in
# svgmaker_mcp.models.requests are the only validation boundary.
PromptArg = Annotated[str | None, Field(description="Text prompt describing the SVG (required)")]
OutputPathArg = Annotated[
    str | None,
    Field(description="Local file path where the SVG will be saved, must end in .svg (required)"),
]
InputPathArg = Annotated[
    str | None, Field(description="Absolute file path to the input image/SVG (required)")
]
QualityArg = Annotated[
    str | None,
    Field(
        description=(
            f"Quality level, one of {_choices(Quality)}. Affects aspect ratio: "
            "low/medium use 'auto', high uses 'square'"
        )
    ),
]
BackgroundArg = Annotated[
    str | None, Field(description=f"Background type, one of {_choices(Background)}")
]
StyleArg = Annotated[str | None, Field(description=f"Art style, one of {_choices(Style)}")]
ColorModeArg = Annotated[str | None, Field(description=f"Color mode, one of {_choices(ColorMode)}")]
ComplexityArg = Annotated[
    str | None, Field(description=f"Level of detail, one of {_choices(ImageComplexity)}")
]
CompositionArg = Annotated[
    str | None, Field(description=f"Layout of the image, one of {_choices(Composition)}")
]
TextStyleArg = Annotated[
    str | None, Field(description=f"How text is rendered, one of {_choices(TextStyle)}")
]
GenerateAspectRatioArg = Annotated[
    str | None,
    Field(description=f"Aspect ratio for the generated SVG, one of {_choices(GenerateAspectRatio)}"),
]
EditAspectRatioArg = Annotated[
    str | None,
    Field(description=f"Aspect ratio for the edited SVG, one of {_choices(EditAspectRatio)}"),
]


def _provided(**arguments) -> dict:
    """Drop omitted (None) arguments so the request models apply their defaults."""
    return {k: v for k, v in arguments.items() if v is not None}


def get_progress_token(ctx: Context) -> ProgressToken | None:
    """Progress token from the request's _meta (None if the caller sent none)."""
    meta = ctx.request_context.meta
    if meta is None:
        return None
    return getattr(meta, "progressToken", None)


def make_progress_sender(ctx: Context) -> ProgressSender:
    """Bind a progress sender to the current request's session."""
    request_id = ctx.request_context.request_id

    async def send(
        token: ProgressToken, progress: float, total: float, message: str | None
    ) -> None:
        await ctx.session.send_progress_notification(
            progress_token=token,
            progress=progress,
            total=total,
            message=message,
            related_request_id=request_id,
        )

    return send


def create_server(client: SvgMakerClient, config: SvgMakerConfig | None = None) -> FastMCP:
    """
    Build the FastMCP server and register the SVG tools.

    Args:
        client: Shared SVGMaker client handed to every tool call
        config: Configuration (defaults to SvgMakerConfig())

    Returns:
        Configured FastMCP instance
    """
    config = config or SvgMakerConfig()
    interval = config.progress.interval
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(
        name="svgmaker_generate",
        description=(
            "Generates an SVG image from a text prompt using SVGMaker API and saves it "
            "to a specified local path."
        ),
    )
    async def svgmaker_generate(
        ctx: Context,
        prompt: PromptArg = None,
        output_path: OutputPathArg = None,
        quality: QualityArg = None,
        aspectRatio: GenerateAspectRatioArg = None,  # noqa: N803
        background: BackgroundArg = None,
        style: StyleArg = None,
        color_mode: ColorModeArg = None,
        image_complexity: ComplexityArg = None,
        composition: CompositionArg = None,
        text_style: TextStyleArg = None,
    ) -> str:
        result = await _generate_svg(
            _provided(
                prompt=prompt,
                output_path=output_path,
                quality=quality,
                aspectRatio=aspectRatio,
                background=background,
                style=style,
                color_mode=color_mode,
                image_complexity=image_complexity,
                composition=composition,
                text_style=text_style,
            ),
            client=client,
            sender=make_progress_sender(ctx),
            progress_token=get_progress_token(ctx),
            progress_interval=interval,
        )
        return result["message"]

    @mcp.tool(
        name="svgmaker_edit",
        description=(
            "Edits an existing image/SVG file based on a text prompt using SVGMaker API "
            "and saves it to a specified local path. Provide specific instructions on how "
            "to modify the image, including style changes, color adjustments, element "
            "additions or removals, and layout modifications."
        ),
    )
    async def svgmaker_edit(
        ctx: Context,
        input_path: InputPathArg = None,
        prompt: PromptArg = None,
        output_path: OutputPathArg = None,
        quality: QualityArg = None,
        aspectRatio: EditAspectRatioArg = None,  # noqa: N803
        background: BackgroundArg = None,
        style: StyleArg = None,
        color_mode: ColorModeArg = None,
        image_complexity: ComplexityArg = None,
        composition: CompositionArg = None,
        text_style: TextStyleArg = None,
    ) -> str:
        result = await _edit_svg(
            _provided(
                input_path=input_path,
                prompt=prompt,
                output_path=output_path,
                quality=quality,
                aspectRatio=aspectRatio,
                background=background,
                style=style,
                color_mode=color_mode,
                image_complexity=image_complexity,
                composition=composition,
                text_style=text_style,
            ),
            client=client,
            sender=make_progress_sender(ctx),
            progress_token=get_progress_token(ctx),
            progress_interval=interval,
        )
        return result["message"]

    @mcp.tool(
        name="svgmaker_convert",
        description=(
            "Converts an image file to SVG format using SVGMaker API and saves it to a "
            "specified local path."
        ),
    )
    async def svgmaker_convert(
        ctx: Context,
        input_path: InputPathArg = None,
        output_path: OutputPathArg = None,
    ) -> str:
        result = await _convert_image(
            _provided(input_path=input_path, output_path=output_path),
            client=client,
            sender=make_progress_sender(ctx),
            progress_token=get_progress_token(ctx),
            progress_interval=interval,
        )
        return result["message"]

    logger.info("MCP server initialized with 3 tools")
    return mcp
