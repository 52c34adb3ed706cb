"""Shading core: height field, parameters, kernel, and rendering passes."""

from .height_field import HeightField
from .parameters import ParameterSet, ParameterSnapshot
from .shading import (
    compute_intensities,
    compute_intensity,
    compute_normal,
    estimate_normals,
    light_direction,
    shade_rows,
)
from .shading_pass import (
    FrameRenderer,
    intensity_to_rgba,
    render_intensity,
    render_shaded_image,
)

__all__ = [
    "HeightField",
    "ParameterSet",
    "ParameterSnapshot",
    "compute_normal",
    "estimate_normals",
    "light_direction",
    "compute_intensity",
    "compute_intensities",
    "shade_rows",
    "render_intensity",
    "render_shaded_image",
    "intensity_to_rgba",
    "FrameRenderer",
]
