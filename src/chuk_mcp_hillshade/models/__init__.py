"""Response models for chuk-mcp-hillshade."""

from .responses import (
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

__all__ = [
    "ErrorResponse",
    "ShadingParameters",
    "FieldLoadResponse",
    "ParametersResponse",
    "RenderResponse",
    "PixelShadeResponse",
    "StatusResponse",
    "CapabilitiesResponse",
    "format_response",
]
