"""
Render tools: whole-image hillshade rendering and single-pixel inspection.
"""

import logging

from ...constants import (
    ALL_STRATEGIES,
    DEFAULT_STRATEGY,
    ErrorMessages,
    SuccessMessages,
)
from ...models.responses import (
    ErrorResponse,
    PixelShadeResponse,
    RenderResponse,
    ShadingParameters,
    format_response,
)

logger = logging.getLogger(__name__)


def register_render_tools(mcp, manager):
    """Register render tools with the MCP server."""

    @mcp.tool()
    async def hillshade_render(
        strategy: str = DEFAULT_STRATEGY,
        workers: int | None = None,
        output_mode: str = "json",
    ) -> str:
        """Render the loaded height field as a greyscale hillshade PNG.

        Both strategies produce identical pixels for the same parameters. The
        outermost ring of pixels is left transparent black.

        Args:
            strategy: "batch" (one full raster pass) or "frame" (per-frame renderer)
            workers: Row bands to shade concurrently (batch only; default from server)
            output_mode: "json" or "text"

        Returns:
            PNG artifact reference, grey level range, and the parameters used
        """
        try:
            if strategy not in ALL_STRATEGIES:
                raise ValueError(
                    ErrorMessages.UNKNOWN_STRATEGY.format(strategy, ", ".join(ALL_STRATEGIES))
                )

            result = await manager.render(strategy=strategy, workers=workers)
            params = ShadingParameters(**result.parameters)

            response = RenderResponse(
                artifact_ref=result.artifact_ref,
                strategy=result.strategy,
                shape=result.shape,
                value_range=result.value_range,
                frame_count=result.frame_count,
                parameters=params,
                message=SuccessMessages.RENDER_COMPLETE.format(
                    f"{result.shape[0]}x{result.shape[1]}",
                    result.strategy,
                    params.azimuth,
                    params.elevation_angle,
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_render failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def hillshade_sample_pixel(
        row: int,
        col: int,
        output_mode: str = "json",
    ) -> str:
        """Compute the surface normal and intensity of one interior pixel.

        Args:
            row: Pixel row (1 to height - 2)
            col: Pixel column (1 to width - 2)
            output_mode: "json" or "text"

        Returns:
            Elevation, unit normal, unclamped intensity, and display grey level
        """
        try:
            result = await manager.sample_pixel(row, col)

            response = PixelShadeResponse(
                row=result.row,
                col=result.col,
                elevation=result.elevation,
                normal=result.normal,
                intensity=result.intensity,
                grey_level=result.grey_level,
                message=SuccessMessages.PIXEL_SHADE.format(
                    result.row, result.col, result.intensity
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_sample_pixel failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
