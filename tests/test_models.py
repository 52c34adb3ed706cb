"""
Tests for chuk-mcp-hillshade response models.

Tests all Pydantic models in chuk_mcp_hillshade.models.responses for:
- Valid creation
- extra="forbid" rejects unknown fields
- to_text() output contains expected strings
- format_response() in json/text modes
"""

import json

import pytest
from pydantic import ValidationError

from chuk_mcp_hillshade.models.responses import (
    CapabilitiesResponse,
    ErrorResponse,
    FieldLoadResponse,
    ParametersResponse,
    PixelShadeResponse,
    RenderResponse,
    ShadingParameters,
    StatusResponse,
    format_response,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_params(**overrides) -> ShadingParameters:
    defaults = dict(
        ambient=0.2,
        diffuse=0.0,
        specular=1.0,
        exaggeration=5.0,
        azimuth=0.0,
        elevation_angle=45.0,
    )
    defaults.update(overrides)
    return ShadingParameters(**defaults)


def _make_render(**overrides) -> RenderResponse:
    defaults = dict(
        artifact_ref="hillshade/0123456789ab.png",
        strategy="batch",
        shape=[64, 80],
        value_range=[20.0, 230.0],
        parameters=_make_params(),
        message="Hillshade rendered",
    )
    defaults.update(overrides)
    return RenderResponse(**defaults)


# ---------------------------------------------------------------------------
# format_response
# ---------------------------------------------------------------------------


class TestFormatResponse:
    def test_json_default(self):
        out = format_response(ErrorResponse(error="boom"))
        assert json.loads(out) == {"error": "boom"}

    def test_text_mode(self):
        assert format_response(ErrorResponse(error="boom"), "text") == "Error: boom"

    def test_unknown_mode_falls_back_to_json(self):
        out = format_response(ErrorResponse(error="boom"), "yaml")
        assert json.loads(out)["error"] == "boom"


class TestErrorResponse:
    def test_required(self):
        with pytest.raises(ValidationError):
            ErrorResponse()

    def test_extra_forbidden(self):
        with pytest.raises(ValidationError):
            ErrorResponse(error="x", code=1)


# ---------------------------------------------------------------------------
# ShadingParameters
# ---------------------------------------------------------------------------


class TestShadingParameters:
    def test_text(self):
        text = _make_params(azimuth=315.0).to_text()
        assert text == (
            "ambient=0.2 diffuse=0 specular=1 exaggeration=5 azimuth=315 elevation=45"
        )

    def test_all_fields_required(self):
        with pytest.raises(ValidationError):
            ShadingParameters(ambient=0.2)

    def test_extra_forbidden(self):
        with pytest.raises(ValidationError):
            _make_params(gamma=2.2)

    def test_out_of_range_values_allowed(self):
        params = _make_params(ambient=-3.0, azimuth=720.0)
        assert params.azimuth == 720.0


# ---------------------------------------------------------------------------
# FieldLoadResponse / ParametersResponse
# ---------------------------------------------------------------------------


class TestFieldLoadResponse:
    def test_text(self):
        resp = FieldLoadResponse(
            shape=[3, 4],
            interior_pixels=2,
            elevation_range=[0.0, 0.5],
            normalized=True,
            message="Height field loaded",
        )
        text = resp.to_text()
        assert "Shape: 3x4" in text
        assert "Elevation range: 0.0000 - 0.5000" in text
        assert "Normalised: yes" in text

    def test_negative_interior_rejected(self):
        with pytest.raises(ValidationError):
            FieldLoadResponse(
                shape=[3, 4],
                interior_pixels=-1,
                elevation_range=[0.0, 1.0],
                normalized=False,
                message="x",
            )


class TestParametersResponse:
    def test_updated_defaults_empty(self):
        resp = ParametersResponse(parameters=_make_params(), message="Current shading parameters")
        assert resp.updated == []

    def test_text(self):
        resp = ParametersResponse(
            parameters=_make_params(diffuse=0.5),
            updated=["diffuse"],
            message="Updated 1 parameter(s): diffuse",
        )
        lines = resp.to_text().splitlines()
        assert lines[0] == "Updated 1 parameter(s): diffuse"
        assert "diffuse=0.5" in lines[1]

    def test_json_nests_parameters(self):
        resp = ParametersResponse(parameters=_make_params(), message="ok")
        data = json.loads(format_response(resp))
        assert data["parameters"]["elevation_angle"] == 45.0


# ---------------------------------------------------------------------------
# RenderResponse
# ---------------------------------------------------------------------------


class TestRenderResponse:
    def test_defaults(self):
        resp = _make_render()
        assert resp.output_format == "png"
        assert resp.frame_count == 0

    def test_batch_text(self):
        text = _make_render().to_text()
        assert "Hillshade: hillshade/0123456789ab.png" in text
        assert "Shape: 64x80" in text
        assert "Grey range: 20 - 230" in text
        assert "Frame:" not in text

    def test_frame_text(self):
        text = _make_render(strategy="frame", frame_count=3).to_text()
        assert "Strategy: frame" in text
        assert "Frame: 3" in text

    def test_negative_frame_count_rejected(self):
        with pytest.raises(ValidationError):
            _make_render(frame_count=-1)


# ---------------------------------------------------------------------------
# PixelShadeResponse
# ---------------------------------------------------------------------------


class TestPixelShadeResponse:
    def _make(self, **overrides):
        defaults = dict(
            row=2,
            col=3,
            elevation=0.5,
            normal=[0.0, 0.0, 1.0],
            intensity=0.553553,
            grey_level=141,
            message="Pixel (2, 3) intensity 0.5536",
        )
        defaults.update(overrides)
        return PixelShadeResponse(**defaults)

    def test_text(self):
        text = self._make().to_text()
        assert "Pixel (2, 3) intensity 0.5536" in text
        assert "Normal: [0.0000, 0.0000, 1.0000]" in text
        assert "Grey level: 141" in text

    @pytest.mark.parametrize("grey", [-1, 256])
    def test_grey_level_bounds(self, grey):
        with pytest.raises(ValidationError):
            self._make(grey_level=grey)

    def test_intensity_unclamped(self):
        assert self._make(intensity=1.7, grey_level=255).intensity == 1.7


# ---------------------------------------------------------------------------
# StatusResponse / CapabilitiesResponse
# ---------------------------------------------------------------------------


class TestStatusResponse:
    def test_defaults(self):
        resp = StatusResponse(field_loaded=False, storage_provider="memory")
        assert resp.server == "chuk-mcp-hillshade"
        assert resp.field_shape is None
        assert resp.workers == 1

    def test_text_without_field(self):
        text = StatusResponse(field_loaded=False, storage_provider="memory").to_text()
        assert "Height field: none" in text
        assert "Artifact store: not available" in text

    def test_text_with_field(self):
        resp = StatusResponse(
            field_loaded=True,
            field_shape=[10, 12],
            storage_provider="s3",
            artifact_store_available=True,
            render_count=4,
            workers=2,
        )
        text = resp.to_text()
        assert "Height field: 10x12" in text
        assert "Storage: s3" in text
        assert "Renders: 4" in text
        assert "Workers: 2" in text

    def test_zero_workers_rejected(self):
        with pytest.raises(ValidationError):
            StatusResponse(field_loaded=False, storage_provider="memory", workers=0)


class TestCapabilitiesResponse:
    def test_text(self):
        resp = CapabilitiesResponse(
            server="chuk-mcp-hillshade",
            version="0.1.0",
            strategies=["batch", "frame"],
            default_strategy="batch",
            parameters=["ambient", "diffuse"],
            default_parameters=_make_params(),
            output_formats=["png"],
            tool_count=7,
            llm_guidance="Load a field, then render.",
            message="ok",
        )
        text = resp.to_text()
        assert "chuk-mcp-hillshade v0.1.0" in text
        assert "Tools: 7" in text
        assert "Parameters: ambient, diffuse" in text
        assert "Guidance: Load a field, then render." in text
