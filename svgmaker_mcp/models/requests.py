# svgmaker_mcp/models/requests.py
"""
Pydantic models for validated tool arguments.

Each tool's raw arguments are validated exactly once, at the handler
boundary, into one of these frozen models.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Quality = Literal["low", "medium", "high"]
GenerateAspectRatio = Literal["square", "portrait", "landscape"]
EditAspectRatio = Literal["auto", "square", "portrait", "landscape"]
Background = Literal["auto", "transparent", "opaque"]

Style = Literal["minimalist", "cartoon", "realistic", "abstract", "flat", "isometric", "none"]
ColorMode = Literal["full_color", "monochrome", "few_colors"]
ImageComplexity = Literal["icon", "illustration", "scene"]
Composition = Literal["centered_object", "repeating_pattern", "full_scene", "objects_in_grid"]
TextStyle = Literal["only_title", "embedded_text"]

SVG_EXTENSION = ".svg"


def resolve_aspect_ratio(quality: str | None, aspect_ratio: str | None) -> str:
    """
    Pick the aspect ratio sent to the API.

    An explicit aspect ratio always wins. Otherwise high quality forces
    "square" and every other quality uses "auto".
    """
    if aspect_ratio:
        return aspect_ratio
    return "square" if quality == "high" else "auto"


class _ToolRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    output_path: str = Field(description="Local file path where the SVG will be saved")

    @field_validator("output_path")
    @classmethod
    def _check_output_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Output path cannot be empty.")
        if not value.lower().endswith(SVG_EXTENSION):
            raise ValueError(f"Output path must end with {SVG_EXTENSION} extension")
        return value


class _StyledRequest(_ToolRequest):
    prompt: str = Field(description="Text prompt describing the SVG")
    quality: Quality = Field(default="medium", description="Quality level")
    background: Background = Field(default="auto", description="Background type")
    style: Style | None = None
    color_mode: ColorMode | None = None
    image_complexity: ImageComplexity | None = None
    composition: Composition | None = None
    text_style: TextStyle | None = None

    @field_validator("prompt")
    @classmethod
    def _check_prompt(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Prompt cannot be empty.")
        return value

    @field_validator("quality", "background", mode="before")
    @classmethod
    def _default_when_none(cls, value, info):
        # Explicit nulls fall back to the field default
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def style_options(self) -> dict[str, str]:
        """Non-empty style options keyed by their API names."""
        options = {
            "style": self.style,
            "color_mode": self.color_mode,
            "image_complexity": self.image_complexity,
            "composition": self.composition,
            "text": self.text_style,
        }
        return {k: v for k, v in options.items() if v is not None}


class GenerateRequest(_StyledRequest):
    """Arguments for svgmaker_generate."""

    aspect_ratio: GenerateAspectRatio | None = Field(default=None, alias="aspectRatio")

    @property
    def effective_aspect_ratio(self) -> str:
        return resolve_aspect_ratio(self.quality, self.aspect_ratio)


class EditRequest(_StyledRequest):
    """Arguments for svgmaker_edit."""

    input_path: str = Field(description="Absolute path to the image/SVG to edit")
    aspect_ratio: EditAspectRatio | None = Field(default=None, alias="aspectRatio")

    @field_validator("input_path")
    @classmethod
    def _check_input_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(
                "Input path cannot be empty. Must be an absolute path to the image file."
            )
        return value

    @property
    def effective_aspect_ratio(self) -> str:
        return resolve_aspect_ratio(self.quality, self.aspect_ratio)


class ConvertRequest(_ToolRequest):
    """Arguments for svgmaker_convert."""

    input_path: str = Field(description="Absolute path to the image file to convert")

    @field_validator("input_path")
    @classmethod
    def _check_input_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(
                "Input path cannot be empty. Must be an absolute path to the image file."
            )
        return value
