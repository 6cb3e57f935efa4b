# svgmaker_mcp/cli.py
"""
CLI interface for svgmaker-mcp.

Thin presentation layer over the tools/ service layer.
All commands delegate to the same functions that MCP wraps.
"""

import asyncio

import typer

app = typer.Typer(
    name="svgmaker-mcp",
    help="Generate, edit, and convert SVGs with the SVGMaker API.",
    no_args_is_help=True,
)

_CLI_PROGRESS_TOKEN = "cli"


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


async def _echo_progress(token, progress: float, total: float, message: str | None) -> None:
    """Progress sender that writes to stderr (stdout stays pipeable)."""
    pct = progress / total * 100 if total else 0.0
    typer.echo(f"[{pct:5.1f}%] {message or ''}", err=True)


def _load_client():
    """Load config and build an SvgMakerClient, exiting if the key is missing."""
    from svgmaker_mcp.config.loader import ConfigError, load_config, require_api_key
    from svgmaker_mcp.services.client import SvgMakerClient

    try:
        config = load_config()
        api_key = require_api_key(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    return config, SvgMakerClient.from_config(config, api_key)


def _invoke(tool, arguments: dict, quiet: bool) -> None:
    config, client = _load_client()

    async def _call():
        try:
            return await tool(
                arguments,
                client=client,
                sender=None if quiet else _echo_progress,
                progress_token=None if quiet else _CLI_PROGRESS_TOKEN,
                progress_interval=config.progress.interval,
            )
        finally:
            await client.aclose()

    try:
        result = _run(_call())
    except Exception as e:
        typer.echo(typer.style(str(e), fg=typer.colors.RED), err=True)
        raise typer.Exit(1)

    typer.echo(result["message"])
    if result.get("svg_url"):
        typer.echo(f"URL: {result['svg_url']}")


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Text prompt for SVG generation"),
    output_path: str = typer.Argument(..., help="Where to save the SVG (.svg)"),
    quality: str = typer.Option(None, "--quality", "-q", help="low, medium, or high"),
    aspect_ratio: str = typer.Option(None, "--aspect-ratio", "-a", help="square, portrait, or landscape"),
    background: str = typer.Option(None, "--background", "-b", help="auto, transparent, or opaque"),
    style: str = typer.Option(None, "--style", help="Art style (e.g. minimalist, cartoon, flat)"),
    quiet: bool = typer.Option(False, "--quiet", help="Hide progress output"),
):
    """Generate an SVG from a text prompt."""
    from svgmaker_mcp.tools.generate import generate_svg

    _invoke(
        generate_svg,
        {
            "prompt": prompt,
            "output_path": output_path,
            "quality": quality,
            "aspectRatio": aspect_ratio,
            "background": background,
            "style": style,
        },
        quiet,
    )


@app.command()
def edit(
    input_path: str = typer.Argument(..., help="Image/SVG file to edit"),
    prompt: str = typer.Argument(..., help="Edit instructions"),
    output_path: str = typer.Argument(..., help="Where to save the edited SVG (.svg)"),
    quality: str = typer.Option(None, "--quality", "-q", help="low, medium, or high"),
    aspect_ratio: str = typer.Option(None, "--aspect-ratio", "-a", help="auto, square, portrait, or landscape"),
    background: str = typer.Option(None, "--background", "-b", help="auto, transparent, or opaque"),
    quiet: bool = typer.Option(False, "--quiet", help="Hide progress output"),
):
    """Edit an existing image or SVG with a text prompt."""
    from svgmaker_mcp.tools.edit import edit_svg

    _invoke(
        edit_svg,
        {
            "input_path": input_path,
            "prompt": prompt,
            "output_path": output_path,
            "quality": quality,
            "aspectRatio": aspect_ratio,
            "background": background,
        },
        quiet,
    )


@app.command()
def convert(
    input_path: str = typer.Argument(..., help="Raster image to convert"),
    output_path: str = typer.Argument(..., help="Where to save the SVG (.svg)"),
    quiet: bool = typer.Option(False, "--quiet", help="Hide progress output"),
):
    """Convert a raster image to SVG."""
    from svgmaker_mcp.tools.convert import convert_image

    _invoke(convert_image, {"input_path": input_path, "output_path": output_path}, quiet)


@app.command()
def serve():
    """Start the MCP server on stdio (for AI agent integration)."""
    from svgmaker_mcp.__main__ import run

    run()


if __name__ == "__main__":
    app()
