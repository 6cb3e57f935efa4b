# svgmaker_mcp/progress/messages.py
"""Human-readable phase messages for each tool's progress session."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PhaseMessages:
    """One message per lifecycle phase of a progress session."""

    initial: str
    preparing: str
    processing: str
    saving: str
    complete: str


GENERATE_MESSAGES = PhaseMessages(
    initial="Starting SVG generation...",
    preparing="Preparing generation request...",
    processing="Generating SVG with AI...",
    saving="Saving SVG file...",
    complete="SVG generation complete!",
)

EDIT_MESSAGES = PhaseMessages(
    initial="Starting SVG edit...",
    preparing="Preparing edit request...",
    processing="Editing SVG with AI...",
    saving="Saving edited SVG...",
    complete="SVG edit complete!",
)

CONVERT_MESSAGES = PhaseMessages(
    initial="Starting image conversion...",
    preparing="Preparing conversion request...",
    processing="Converting image to SVG...",
    saving="Saving SVG file...",
    complete="Image conversion complete!",
)
