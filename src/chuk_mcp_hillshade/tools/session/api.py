"""
Session tools: height field loading and shading parameter control.

These tools play the role of the UI controller: they replace the session's
height field and mutate its live ParameterSet between renders.
"""

import logging

from ...constants import SuccessMessages
from ...models.responses import (
    ErrorResponse,
    FieldLoadResponse,
    ParametersResponse,
    ShadingParameters,
    format_response,
)

logger = logging.getLogger(__name__)


def register_session_tools(mcp, manager):
    """Register session tools with the MCP server."""

    @mcp.tool()
    async def hillshade_load_field(
        elevation: list[list[float]],
        normalize: bool = False,
        output_mode: str = "json",
    ) -> str:
        """Load a 2-D elevation grid as the session's height field.

        Args:
            elevation: Row-major grid (list of rows), at least 3x3
            normalize: Min-max scale values to [0, 1] before loading
            output_mode: "json" or "text"

        Returns:
            Field shape, interior pixel count, and elevation range
        """
        try:
            info = manager.load_field(elevation, normalize=normalize)

            response = FieldLoadResponse(
                shape=info.shape,
                interior_pixels=info.interior_pixels,
                elevation_range=info.elevation_range,
                normalized=normalize,
                message=SuccessMessages.FIELD_LOADED.format(
                    info.shape[0], info.shape[1], info.interior_pixels
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_load_field failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def hillshade_get_parameters(output_mode: str = "json") -> str:
        """Get the current shading parameters.

        Args:
            output_mode: "json" or "text"

        Returns:
            Ambient, diffuse, specular, exaggeration, azimuth, and elevation angle
        """
        try:
            response = ParametersResponse(
                parameters=ShadingParameters(**manager.get_parameters()),
                message=SuccessMessages.PARAMETERS,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_get_parameters failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def hillshade_set_parameters(
        ambient: float | None = None,
        diffuse: float | None = None,
        specular: float | None = None,
        exaggeration: float | None = None,
        azimuth: float | None = None,
        elevation_angle: float | None = None,
        output_mode: str = "json",
    ) -> str:
        """Change one or more shading parameters. Omitted parameters keep their values.

        Any real value is accepted; no parameter is range-checked.

        Args:
            ambient: Constant illumination term
            diffuse: Weight of the N.L diffuse term
            specular: Weight of the cubic specular term
            exaggeration: Vertical relief multiplier
            azimuth: Light azimuth in degrees (taken mod 360)
            elevation_angle: Light angle above the horizon in degrees
            output_mode: "json" or "text"

        Returns:
            The parameters after the update
        """
        try:
            changes = {
                name: value
                for name, value in {
                    "ambient": ambient,
                    "diffuse": diffuse,
                    "specular": specular,
                    "exaggeration": exaggeration,
                    "azimuth": azimuth,
                    "elevation_angle": elevation_angle,
                }.items()
                if value is not None
            }

            values = manager.update_parameters(**changes)
            updated = sorted(changes)

            response = ParametersResponse(
                parameters=ShadingParameters(**values),
                updated=updated,
                message=SuccessMessages.PARAMETERS_UPDATED.format(
                    len(updated), ", ".join(updated) or "none"
                ),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_set_parameters failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
