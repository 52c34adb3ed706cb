"""
Response models for chuk-mcp-hillshade tools.

All tool responses are Pydantic models for type safety and consistent API.
"""

from pydantic import BaseModel, ConfigDict, Field


def format_response(model: BaseModel, output_mode: str = "json") -> str:
    """Format a response model as JSON or human-readable text.

    Args:
        model: Pydantic response model instance
        output_mode: "json" (default) or "text"

    Returns:
        Formatted string
    """
    if output_mode == "text" and hasattr(model, "to_text"):
        return str(model.to_text())
    return str(model.model_dump_json())


class ErrorResponse(BaseModel):
    """Error response model for tool failures."""

    model_config = ConfigDict(extra="forbid")

    error: str = Field(..., description="Error message describing what went wrong")

    def to_text(self) -> str:
        return f"Error: {self.error}"


class ShadingParameters(BaseModel):
    """Current values of the shading controls."""

    model_config = ConfigDict(extra="forbid")

    ambient: float = Field(..., description="Constant illumination term")
    diffuse: float = Field(..., description="Weight of the N.L diffuse term")
    specular: float = Field(..., description="Weight of the cubic specular term")
    exaggeration: float = Field(..., description="Vertical relief multiplier")
    azimuth: float = Field(..., description="Light azimuth in degrees (mod 360)")
    elevation_angle: float = Field(..., description="Light angle above horizon in degrees")

    def to_text(self) -> str:
        return (
            f"ambient={self.ambient:g} diffuse={self.diffuse:g} specular={self.specular:g} "
            f"exaggeration={self.exaggeration:g} azimuth={self.azimuth:g} "
            f"elevation={self.elevation_angle:g}"
        )


class FieldLoadResponse(BaseModel):
    """Response model for loading a height field into the session."""

    model_config = ConfigDict(extra="forbid")

    shape: list[int] = Field(..., description="Field shape [rows, cols]")
    interior_pixels: int = Field(..., description="Number of shadeable interior pixels", ge=0)
    elevation_range: list[float] = Field(..., description="[min, max] elevation after loading")
    normalized: bool = Field(..., description="Whether the grid was min-max normalised")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            self.message,
            f"Shape: {self.shape[0]}x{self.shape[1]}",
            f"Elevation range: {self.elevation_range[0]:.4f} - {self.elevation_range[1]:.4f}",
            f"Normalised: {'yes' if self.normalized else 'no'}",
        ]
        return "\n".join(lines)


class ParametersResponse(BaseModel):
    """Response model for reading or updating shading parameters."""

    model_config = ConfigDict(extra="forbid")

    parameters: ShadingParameters = Field(..., description="Current shading parameters")
    updated: list[str] = Field(default_factory=list, description="Names changed by this call")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        return "\n".join([self.message, self.parameters.to_text()])


class RenderResponse(BaseModel):
    """Response model for a hillshade render."""

    model_config = ConfigDict(extra="forbid")

    artifact_ref: str = Field(..., description="Artifact store reference for the PNG")
    strategy: str = Field(..., description="Execution strategy (batch or frame)")
    shape: list[int] = Field(..., description="Image shape [rows, cols]")
    value_range: list[float] = Field(..., description="[min, max] grey level of interior pixels")
    frame_count: int = Field(default=0, description="Frames rendered so far (frame strategy)", ge=0)
    parameters: ShadingParameters = Field(..., description="Parameter snapshot used for the render")
    output_format: str = Field(default="png", description="Output image format")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Hillshade: {self.artifact_ref}",
            f"Strategy: {self.strategy}",
            f"Shape: {self.shape[0]}x{self.shape[1]}",
            f"Grey range: {self.value_range[0]:.0f} - {self.value_range[1]:.0f}",
            f"Parameters: {self.parameters.to_text()}",
        ]
        if self.strategy == "frame":
            lines.append(f"Frame: {self.frame_count}")
        return "\n".join(lines)


class PixelShadeResponse(BaseModel):
    """Response model for shading a single pixel."""

    model_config = ConfigDict(extra="forbid")

    row: int = Field(..., description="Pixel row")
    col: int = Field(..., description="Pixel column")
    elevation: float = Field(..., description="Normalised elevation at the pixel")
    normal: list[float] = Field(..., description="Unit surface normal [x, y, z]")
    intensity: float = Field(..., description="Unclamped reflectance")
    grey_level: int = Field(..., description="Display grey level 0-255", ge=0, le=255)
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        normal = ", ".join(f"{v:.4f}" for v in self.normal)
        lines = [
            self.message,
            f"Elevation: {self.elevation:.4f}",
            f"Normal: [{normal}]",
            f"Grey level: {self.grey_level}",
        ]
        return "\n".join(lines)


class StatusResponse(BaseModel):
    """Response model for server status queries."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(default="chuk-mcp-hillshade", description="Server name")
    version: str = Field(default="0.1.0", description="Server version")
    field_loaded: bool = Field(..., description="Whether a height field is loaded")
    field_shape: list[int] | None = Field(default=None, description="Loaded field shape")
    storage_provider: str = Field(..., description="Active storage provider (memory/filesystem/s3)")
    artifact_store_available: bool = Field(
        default=False, description="Whether artifact store is available"
    )
    render_count: int = Field(default=0, description="Renders completed this session", ge=0)
    workers: int = Field(default=1, description="Default worker count for batch renders", ge=1)

    def to_text(self) -> str:
        store_status = "available" if self.artifact_store_available else "not available"
        if self.field_loaded and self.field_shape:
            field = f"{self.field_shape[0]}x{self.field_shape[1]}"
        else:
            field = "none"
        lines = [
            f"{self.server} v{self.version}",
            f"Height field: {field}",
            f"Storage: {self.storage_provider}",
            f"Artifact store: {store_status}",
            f"Renders: {self.render_count}",
            f"Workers: {self.workers}",
        ]
        return "\n".join(lines)


class CapabilitiesResponse(BaseModel):
    """Response model for server capabilities listing."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(..., description="Server name")
    version: str = Field(..., description="Server version")
    strategies: list[str] = Field(..., description="Available render strategies")
    default_strategy: str = Field(..., description="Default render strategy")
    parameters: list[str] = Field(..., description="Shading parameter names")
    default_parameters: ShadingParameters = Field(..., description="Initial parameter values")
    output_formats: list[str] = Field(..., description="Supported output formats")
    tool_count: int = Field(..., description="Number of available tools", ge=0)
    llm_guidance: str = Field(..., description="LLM-friendly usage guidance for the server")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"{self.server} v{self.version}",
            f"Tools: {self.tool_count}",
            f"Strategies: {', '.join(self.strategies)} (default {self.default_strategy})",
            f"Parameters: {', '.join(self.parameters)}",
            f"Defaults: {self.default_parameters.to_text()}",
            f"Output formats: {', '.join(self.output_formats)}",
            f"Guidance: {self.llm_guidance}",
        ]
        return "\n".join(lines)
