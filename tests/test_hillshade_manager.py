"""
Comprehensive tests for HillshadeManager.

Covers session state (field loading, parameters), async rendering with a
mocked artifact store, single-pixel sampling, and environment configuration.
"""

import io
import math
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
from PIL import Image

from chuk_mcp_hillshade.core.hillshade_manager import (
    FieldInfo,
    HillshadeManager,
    PixelResult,
    RenderResult,
    _workers_from_env,
)
from chuk_mcp_hillshade.core.shading_pass import render_shaded_image


# ===================================================================
# Session state (sync)
# ===================================================================


class TestLoadField:
    def test_returns_field_info(self, mock_manager, sample_elevation):
        info = mock_manager.load_field(sample_elevation)
        assert isinstance(info, FieldInfo)
        assert info.shape == [40, 50]
        assert info.interior_pixels == 38 * 48
        assert info.elevation_range[0] == pytest.approx(sample_elevation.min())

    def test_field_available_after_load(self, mock_manager, sample_elevation):
        assert mock_manager.field is None
        mock_manager.load_field(sample_elevation)
        assert mock_manager.field.shape == (40, 50)

    def test_normalize(self, mock_manager):
        info = mock_manager.load_field([[100.0, 200.0, 300.0]] * 3, normalize=True)
        assert info.elevation_range == [0.0, 1.0]

    def test_without_normalize_keeps_values(self, mock_manager):
        info = mock_manager.load_field([[100.0, 200.0, 300.0]] * 3)
        assert info.elevation_range == [100.0, 300.0]

    def test_invalid_grid_keeps_previous_field(self, mock_manager, sample_elevation):
        mock_manager.load_field(sample_elevation)
        with pytest.raises(ValueError):
            mock_manager.load_field([[0.0, 1.0]])
        assert mock_manager.field.shape == (40, 50)

    def test_require_field_without_load(self, mock_manager):
        with pytest.raises(RuntimeError, match="No height field loaded"):
            mock_manager.require_field()


class TestParameters:
    def test_defaults(self, mock_manager):
        params = mock_manager.get_parameters()
        assert params["ambient"] == 0.2
        assert params["exaggeration"] == 5.0

    def test_update_returns_new_values(self, mock_manager):
        result = mock_manager.update_parameters(azimuth=270.0, diffuse=0.5)
        assert result["azimuth"] == 270.0
        assert result["diffuse"] == 0.5
        assert mock_manager.parameters.azimuth == 270.0

    def test_update_unknown_raises(self, mock_manager):
        with pytest.raises(TypeError):
            mock_manager.update_parameters(gamma=2.2)


class TestWorkersFromEnv:
    def test_default(self):
        with patch.dict("os.environ", {}, clear=True):
            assert _workers_from_env() == 1

    def test_valid(self):
        with patch.dict("os.environ", {"HILLSHADE_RENDER_WORKERS": "4"}):
            assert _workers_from_env() == 4

    @pytest.mark.parametrize("raw", ["four", "0", "999"])
    def test_invalid_falls_back(self, raw):
        with patch.dict("os.environ", {"HILLSHADE_RENDER_WORKERS": raw}):
            assert _workers_from_env() == 1

    def test_manager_reads_env(self):
        with patch.dict("os.environ", {"HILLSHADE_RENDER_WORKERS": "3"}):
            assert HillshadeManager().workers == 3

    def test_explicit_overrides_env(self):
        with patch.dict("os.environ", {"HILLSHADE_RENDER_WORKERS": "3"}):
            assert HillshadeManager(workers=2).workers == 2


# ===================================================================
# Rendering (async)
# ===================================================================


class TestRender:
    @pytest.mark.asyncio
    async def test_batch_render_stores_png(self, mock_manager, mock_artifact_store, sample_elevation):
        mock_manager.load_field(sample_elevation)
        result = await mock_manager.render()

        assert isinstance(result, RenderResult)
        assert result.strategy == "batch"
        assert result.shape == [40, 50]
        assert result.frame_count == 0
        assert result.artifact_ref.startswith("hillshade/")
        assert result.artifact_ref.endswith(".png")

        mock_artifact_store.store.assert_awaited_once()
        args, kwargs = mock_artifact_store.store.call_args
        assert args[0] == result.artifact_ref
        assert args[1][:4] == b"\x89PNG"
        assert kwargs["mime_type"] == "image/png"
        assert kwargs["metadata"]["type"] == "hillshade"
        assert kwargs["metadata"]["strategy"] == "batch"

    @pytest.mark.asyncio
    async def test_stored_png_matches_kernel(self, mock_manager, mock_artifact_store, sample_elevation):
        mock_manager.load_field(sample_elevation)
        await mock_manager.render()

        png = mock_artifact_store.store.call_args.args[1]
        decoded = np.asarray(Image.open(io.BytesIO(png)))
        expected = render_shaded_image(mock_manager.field, mock_manager.parameters)
        assert np.array_equal(decoded, expected)

    @pytest.mark.asyncio
    async def test_frame_strategy_counts_frames(self, mock_manager, sample_elevation):
        mock_manager.load_field(sample_elevation)
        first = await mock_manager.render(strategy="frame")
        second = await mock_manager.render(strategy="frame")
        assert first.frame_count == 1
        assert second.frame_count == 2
        assert mock_manager.render_count == 2

    @pytest.mark.asyncio
    async def test_strategies_store_identical_pngs(self, mock_manager, mock_artifact_store, sample_elevation):
        mock_manager.load_field(sample_elevation)
        mock_manager.update_parameters(diffuse=0.6, azimuth=120.0)

        await mock_manager.render(strategy="batch")
        await mock_manager.render(strategy="frame")

        batch_png = mock_artifact_store.store.call_args_list[0].args[1]
        frame_png = mock_artifact_store.store.call_args_list[1].args[1]
        assert batch_png == frame_png

    @pytest.mark.asyncio
    async def test_parameters_snapshot_in_result(self, mock_manager, sample_elevation):
        mock_manager.load_field(sample_elevation)
        mock_manager.update_parameters(azimuth=45.0)
        result = await mock_manager.render()
        assert result.parameters["azimuth"] == 45.0

    @pytest.mark.asyncio
    async def test_value_range(self, mock_manager):
        mock_manager.load_field(np.full((6, 6), 0.5))
        result = await mock_manager.render()
        assert result.value_range == [141.0, 141.0]

    @pytest.mark.asyncio
    async def test_render_without_field(self, mock_manager):
        with pytest.raises(RuntimeError, match="No height field loaded"):
            await mock_manager.render()

    @pytest.mark.asyncio
    async def test_unknown_strategy(self, mock_manager, sample_elevation):
        mock_manager.load_field(sample_elevation)
        with pytest.raises(ValueError, match="gpu"):
            await mock_manager.render(strategy="gpu")

    @pytest.mark.asyncio
    async def test_workers_override(self, mock_manager, sample_elevation):
        mock_manager.load_field(sample_elevation)
        with patch(
            "chuk_mcp_hillshade.core.hillshade_manager.render_shaded_image",
            wraps=render_shaded_image,
        ) as wrapped:
            await mock_manager.render(workers=4)
        assert wrapped.call_args.args[3] == 4

    @pytest.mark.asyncio
    async def test_zero_workers_rejected(self, mock_manager, mock_artifact_store, sample_elevation):
        mock_manager.load_field(sample_elevation)
        with pytest.raises(ValueError, match="workers must be between 1 and"):
            await mock_manager.render(workers=0)
        mock_artifact_store.store.assert_not_called()
        assert mock_manager.render_count == 0

    @pytest.mark.asyncio
    async def test_no_store_raises(self, sample_elevation):
        manager = HillshadeManager(workers=1)
        manager._get_store = MagicMock(side_effect=RuntimeError("No artifact store available."))
        manager.load_field(sample_elevation)
        with pytest.raises(RuntimeError, match="No artifact store"):
            await manager.render()


class TestSamplePixel:
    @pytest.mark.asyncio
    async def test_flat_reference(self, mock_manager):
        mock_manager.load_field(np.full((5, 5), 0.5))
        result = await mock_manager.sample_pixel(2, 2)

        assert isinstance(result, PixelResult)
        assert result.normal == [0.0, 0.0, 1.0]
        assert result.intensity == pytest.approx(0.2 + math.sin(math.radians(45)) ** 3)
        assert result.grey_level == 141
        assert result.elevation == 0.5

    @pytest.mark.asyncio
    async def test_matches_rendered_pixel(self, mock_manager, sample_elevation):
        mock_manager.load_field(sample_elevation)
        mock_manager.update_parameters(diffuse=0.7, specular=0.3, azimuth=200.0)
        result = await mock_manager.sample_pixel(12, 30)
        image = render_shaded_image(mock_manager.field, mock_manager.parameters)
        assert result.grey_level == int(image[12, 30, 0])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("row,col", [(0, 5), (5, 0), (39, 5), (5, 49), (100, 100)])
    async def test_border_rejected(self, mock_manager, sample_elevation, row, col):
        mock_manager.load_field(sample_elevation)
        with pytest.raises(IndexError, match="not interior"):
            await mock_manager.sample_pixel(row, col)

    @pytest.mark.asyncio
    async def test_without_field(self, mock_manager):
        with pytest.raises(RuntimeError):
            await mock_manager.sample_pixel(1, 1)
