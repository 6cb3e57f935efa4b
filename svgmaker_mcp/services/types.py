# svgmaker_mcp/services/types.py
"""Per-operation request payloads and the normalized API result."""

import json
from dataclasses import dataclass, field

from svgmaker_mcp.models.requests import ConvertRequest, EditRequest, GenerateRequest


@dataclass(frozen=True)
class GeneratePayload:
    """Body of a text-to-SVG request."""

    prompt: str
    quality: str
    aspect_ratio: str
    background: str
    style_params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_request(cls, request: GenerateRequest) -> "GeneratePayload":
        return cls(
            prompt=request.prompt,
            quality=request.quality,
            aspect_ratio=request.effective_aspect_ratio,
            background=request.background,
            style_params=request.style_options(),
        )

    def to_json(self) -> dict:
        body = {
            "prompt": self.prompt,
            "quality": self.quality,
            "aspectRatio": self.aspect_ratio,
            "background": self.background,
            "svgText": True,
        }
        if self.style_params:
            body["styleParams"] = dict(self.style_params)
        return body


@dataclass(frozen=True)
class EditPayload:
    """Multipart body of an image edit request."""

    image: bytes
    filename: str
    prompt: str
    quality: str
    aspect_ratio: str
    background: str
    style_params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_request(
        cls, request: EditRequest, image: bytes, filename: str
    ) -> "EditPayload":
        return cls(
            image=image,
            filename=filename,
            prompt=request.prompt,
            quality=request.quality,
            aspect_ratio=request.effective_aspect_ratio,
            background=request.background,
            style_params=request.style_options(),
        )

    def to_form(self) -> dict[str, str]:
        form = {
            "prompt": self.prompt,
            "quality": self.quality,
            "aspectRatio": self.aspect_ratio,
            "background": self.background,
            "svgText": "true",
        }
        if self.style_params:
            form["styleParams"] = json.dumps(self.style_params)
        return form

    def to_files(self) -> dict[str, tuple[str, bytes]]:
        return {"image": (self.filename, self.image)}


@dataclass(frozen=True)
class ConvertPayload:
    """Multipart body of a raster-to-SVG conversion request."""

    file: bytes
    filename: str

    @classmethod
    def from_request(
        cls, request: ConvertRequest, file: bytes, filename: str
    ) -> "ConvertPayload":
        return cls(file=file, filename=filename)

    def to_form(self) -> dict[str, str]:
        return {"svgText": "true"}

    def to_files(self) -> dict[str, tuple[str, bytes]]:
        return {"file": (self.filename, self.file)}


@dataclass
class SvgResult:
    """Normalized API response. svg_text is always non-empty."""

    svg_text: str
    svg_url: str | None = None
    credit_cost: float | None = None
