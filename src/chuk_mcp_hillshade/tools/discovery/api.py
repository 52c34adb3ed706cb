"""
Discovery tools: server status and capabilities.

These tools do no shading work and return information about the session
and server configuration.
"""

import logging
import os

from ...constants import (
    ALL_STRATEGIES,
    DEFAULT_STRATEGY,
    OUTPUT_FORMATS,
    PARAMETER_NAMES,
    EnvVar,
    ServerConfig,
    StorageProvider,
)
from ...core.parameters import ParameterSnapshot
from ...models.responses import (
    CapabilitiesResponse,
    ErrorResponse,
    ShadingParameters,
    StatusResponse,
    format_response,
)

logger = logging.getLogger(__name__)


def register_discovery_tools(mcp, manager):
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    async def hillshade_status(output_mode: str = "json") -> str:
        """Get server status including loaded height field, storage, and render count.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Server status information
        """
        try:
            provider = os.environ.get(EnvVar.ARTIFACTS_PROVIDER, StorageProvider.MEMORY)

            store_available = False
            try:
                manager._get_store()
                store_available = True
            except Exception:
                pass

            field = manager.field
            response = StatusResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                field_loaded=field is not None,
                field_shape=list(field.shape) if field is not None else None,
                storage_provider=provider,
                artifact_store_available=store_available,
                render_count=manager.render_count,
                workers=manager.workers,
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_status failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def hillshade_capabilities(output_mode: str = "json") -> str:
        """Get full server capabilities including render strategies, shading
        parameters with their defaults, and output formats.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Complete server capabilities
        """
        try:
            response = CapabilitiesResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                strategies=ALL_STRATEGIES,
                default_strategy=DEFAULT_STRATEGY,
                parameters=PARAMETER_NAMES,
                default_parameters=ShadingParameters(**ParameterSnapshot().to_dict()),
                output_formats=OUTPUT_FORMATS,
                tool_count=7,
                llm_guidance=(
                    "Use hillshade_load_field with a 2-D elevation grid (values in [0, 1], "
                    "or pass normalize=true for raw heights). "
                    "Adjust lighting with hillshade_set_parameters. "
                    "Use hillshade_render to produce a PNG artifact; the outermost pixel "
                    "ring is never shaded. "
                    "Use hillshade_sample_pixel to inspect the normal and intensity of one pixel."
                ),
                message=f"{ServerConfig.NAME} v{ServerConfig.VERSION} capabilities",
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"hillshade_capabilities failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
