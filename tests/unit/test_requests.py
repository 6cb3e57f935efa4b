# tests/unit/test_requests.py
"""Tests for tool request models and payload construction."""

import json

import pytest
from pydantic import ValidationError

from svgmaker_mcp.models.requests import (
    ConvertRequest,
    EditRequest,
    GenerateRequest,
    resolve_aspect_ratio,
)
from svgmaker_mcp.services.types import ConvertPayload, EditPayload, GeneratePayload


class TestResolveAspectRatio:
    def test_explicit_wins(self):
        assert resolve_aspect_ratio("high", "portrait") == "portrait"

    def test_high_quality_forces_square(self):
        assert resolve_aspect_ratio("high", None) == "square"

    @pytest.mark.parametrize("quality", ["low", "medium", None])
    def test_other_qualities_use_auto(self, quality):
        assert resolve_aspect_ratio(quality, None) == "auto"


class TestGenerateRequest:
    def test_defaults(self):
        request = GenerateRequest.model_validate(
            {"prompt": "a red circle", "output_path": "/tmp/out.svg"}
        )
        assert request.quality == "medium"
        assert request.background == "auto"
        assert request.aspect_ratio is None
        assert request.effective_aspect_ratio == "auto"

    def test_explicit_nulls_use_defaults(self):
        request = GenerateRequest.model_validate(
            {"prompt": "x", "output_path": "/tmp/o.svg", "quality": None, "background": None}
        )
        assert request.quality == "medium"
        assert request.background == "auto"

    def test_camel_case_aspect_ratio(self):
        request = GenerateRequest.model_validate(
            {"prompt": "x", "output_path": "/tmp/o.svg", "aspectRatio": "landscape"}
        )
        assert request.effective_aspect_ratio == "landscape"

    def test_high_quality_square(self):
        request = GenerateRequest.model_validate(
            {"prompt": "x", "output_path": "/tmp/o.svg", "quality": "high"}
        )
        assert request.effective_aspect_ratio == "square"

    def test_output_path_requires_svg_extension(self):
        with pytest.raises(ValidationError, match=".svg extension"):
            GenerateRequest.model_validate({"prompt": "x", "output_path": "/tmp/o.png"})

    def test_uppercase_extension_accepted(self):
        request = GenerateRequest.model_validate({"prompt": "x", "output_path": "/tmp/O.SVG"})
        assert request.output_path == "/tmp/O.SVG"

    def test_blank_prompt_rejected(self):
        with pytest.raises(ValidationError, match="Prompt cannot be empty"):
            GenerateRequest.model_validate({"prompt": "   ", "output_path": "/tmp/o.svg"})

    def test_auto_aspect_ratio_not_allowed(self):
        with pytest.raises(ValidationError):
            GenerateRequest.model_validate(
                {"prompt": "x", "output_path": "/tmp/o.svg", "aspectRatio": "auto"}
            )

    def test_unknown_quality_rejected(self):
        with pytest.raises(ValidationError):
            GenerateRequest.model_validate(
                {"prompt": "x", "output_path": "/tmp/o.svg", "quality": "ultra"}
            )

    def test_frozen(self):
        request = GenerateRequest.model_validate({"prompt": "x", "output_path": "/tmp/o.svg"})
        with pytest.raises(ValidationError):
            request.prompt = "y"

    def test_style_options_only_set_values(self):
        request = GenerateRequest.model_validate(
            {
                "prompt": "x",
                "output_path": "/tmp/o.svg",
                "style": "flat",
                "text_style": "only_title",
            }
        )
        assert request.style_options() == {"style": "flat", "text": "only_title"}


class TestEditRequest:
    def test_auto_aspect_ratio_allowed(self):
        request = EditRequest.model_validate(
            {
                "input_path": "/tmp/in.png",
                "prompt": "make it blue",
                "output_path": "/tmp/o.svg",
                "aspectRatio": "auto",
                "quality": "high",
            }
        )
        assert request.effective_aspect_ratio == "auto"

    def test_input_path_required(self):
        with pytest.raises(ValidationError):
            EditRequest.model_validate({"prompt": "x", "output_path": "/tmp/o.svg"})


class TestConvertRequest:
    def test_blank_input_rejected(self):
        with pytest.raises(ValidationError, match="Input path cannot be empty"):
            ConvertRequest.model_validate({"input_path": "", "output_path": "/tmp/o.svg"})


class TestPayloads:
    def test_generate_payload_json(self):
        request = GenerateRequest.model_validate(
            {"prompt": "a fox", "output_path": "/tmp/o.svg", "quality": "high", "style": "cartoon"}
        )
        body = GeneratePayload.from_request(request).to_json()
        assert body == {
            "prompt": "a fox",
            "quality": "high",
            "aspectRatio": "square",
            "background": "auto",
            "svgText": True,
            "styleParams": {"style": "cartoon"},
        }

    def test_generate_payload_without_style(self):
        request = GenerateRequest.model_validate({"prompt": "a fox", "output_path": "/tmp/o.svg"})
        assert "styleParams" not in GeneratePayload.from_request(request).to_json()

    def test_edit_payload_form(self):
        request = EditRequest.model_validate(
            {
                "input_path": "/tmp/in.png",
                "prompt": "add a hat",
                "output_path": "/tmp/o.svg",
                "color_mode": "monochrome",
            }
        )
        payload = EditPayload.from_request(request, b"img", "in.png")
        form = payload.to_form()
        assert form["svgText"] == "true"
        assert form["aspectRatio"] == "auto"
        assert json.loads(form["styleParams"]) == {"color_mode": "monochrome"}
        assert payload.to_files() == {"image": ("in.png", b"img")}

    def test_convert_payload(self):
        request = ConvertRequest.model_validate(
            {"input_path": "/tmp/in.png", "output_path": "/tmp/o.svg"}
        )
        payload = ConvertPayload.from_request(request, b"png", "in.png")
        assert payload.to_form() == {"svgText": "true"}
        assert payload.to_files() == {"file": ("in.png", b"png")}
