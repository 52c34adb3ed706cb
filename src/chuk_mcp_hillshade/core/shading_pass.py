"""
Shading passes: batch raster rendering and per-frame rendering.

Both strategies run `shading.shade_rows` over the interior of the field from a
single up-front ParameterSnapshot; they differ only in when they run. The
outermost ring of pixels is never written: central differences need both
neighbours on each axis.
"""

import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..constants import (
    BORDER_WIDTH,
    DEFAULT_WORKERS,
    INTENSITY_SCALE,
    MAX_WORKERS,
    OPAQUE_ALPHA,
    ErrorMessages,
)
from .height_field import HeightField
from .parameters import ParameterSet, ParameterSnapshot, as_snapshot
from .shading import shade_rows

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating[Any]]
RGBAImage = NDArray[np.uint8]


# ---------------------------------------------------------------------------
# Interior evaluation
# ---------------------------------------------------------------------------


def _row_bands(height: int, workers: int) -> list[tuple[int, int]]:
    """Split interior rows into at most `workers` contiguous bands."""
    first = BORDER_WIDTH
    last = height - BORDER_WIDTH
    edges = np.linspace(first, last, num=min(workers, last - first) + 1).round().astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def _validate_workers(workers: int) -> None:
    if not 1 <= workers <= MAX_WORKERS:
        raise ValueError(ErrorMessages.INVALID_WORKERS.format(MAX_WORKERS, workers))


def shade_interior(
    field: HeightField,
    snap: ParameterSnapshot,
    workers: int = DEFAULT_WORKERS,
) -> FloatArray:
    """
    Unclamped intensities for every interior pixel, shape (height - 2, width - 2).

    With workers > 1 the interior rows are shaded as independent bands on a
    thread pool; the result is assembled after all bands complete.
    """
    _validate_workers(workers)
    data = field.data

    if workers == 1:
        return shade_rows(data, snap)

    bands = _row_bands(field.height, workers)
    logger.debug(f"Shading {len(bands)} row bands on {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        parts = list(pool.map(lambda band: shade_rows(data, snap, band[0], band[1]), bands))

    return np.concatenate(parts, axis=0)


# ---------------------------------------------------------------------------
# Output encoding
# ---------------------------------------------------------------------------


def intensity_to_rgba(intensity: FloatArray, out: RGBAImage | None = None) -> RGBAImage:
    """
    Encode interior intensities as greyscale RGBA into the interior of `out`.

    Intensity is scaled by 255, saturated to [0, 255] and rounded; alpha is
    fully opaque. Border pixels of `out` are left as they are.

    Args:
        intensity: Interior intensities (height - 2, width - 2)
        out: Optional (height, width, 4) uint8 buffer; zero-filled if omitted

    Returns:
        The RGBA buffer
    """
    b = BORDER_WIDTH
    shape = (intensity.shape[0] + 2 * b, intensity.shape[1] + 2 * b, 4)

    if out is None:
        out = np.zeros(shape, dtype=np.uint8)
    elif out.shape != shape or out.dtype != np.uint8:
        raise ValueError(ErrorMessages.OUT_SHAPE_MISMATCH.format(out.shape, shape))

    grey = np.rint(np.clip(intensity * INTENSITY_SCALE, 0.0, INTENSITY_SCALE)).astype(np.uint8)

    interior = out[b:-b, b:-b]
    interior[..., 0] = grey
    interior[..., 1] = grey
    interior[..., 2] = grey
    interior[..., 3] = OPAQUE_ALPHA
    return out


# ---------------------------------------------------------------------------
# Batch strategy
# ---------------------------------------------------------------------------


def render_intensity(
    field: HeightField,
    params: ParameterSet | ParameterSnapshot,
    workers: int = DEFAULT_WORKERS,
) -> FloatArray:
    """
    Full-size unclamped intensity grid; border pixels are NaN.

    Parameters are snapshotted once before any pixel is shaded.
    """
    snap = as_snapshot(params)
    result = np.full(field.shape, np.nan, dtype=np.float64)
    b = BORDER_WIDTH
    result[b:-b, b:-b] = shade_interior(field, snap, workers)
    return result


def render_shaded_image(
    field: HeightField,
    params: ParameterSet | ParameterSnapshot,
    out: RGBAImage | None = None,
    workers: int = DEFAULT_WORKERS,
) -> RGBAImage:
    """
    Render the whole field to a greyscale RGBA image in one pass.

    Args:
        field: Height field to shade
        params: Live ParameterSet (snapshotted once) or a snapshot
        out: Optional (height, width, 4) uint8 buffer to draw into; only
            interior pixels are written
        workers: Number of row bands to shade concurrently

    Returns:
        RGBA uint8 array of shape (height, width, 4)
    """
    snap = as_snapshot(params)
    intensity = shade_interior(field, snap, workers)
    return intensity_to_rgba(intensity, out)


# ---------------------------------------------------------------------------
# Per-frame strategy
# ---------------------------------------------------------------------------


class FrameRenderer:
    """
    Per-frame renderer: re-shades the field on every frame.

    Holds only the height field (the "texture") and a frame counter. Each
    frame is self-contained: the live ParameterSet is snapshotted at the start
    of the frame, so a controller may change it between any two frames
    without further coordination.
    """

    def __init__(self, field: HeightField, workers: int = DEFAULT_WORKERS) -> None:
        _validate_workers(workers)
        self.field = field
        self.workers = workers
        self.frame_count = 0
        self.last_snapshot: ParameterSnapshot | None = None

    def render_frame(
        self,
        params: ParameterSet | ParameterSnapshot,
        out: RGBAImage | None = None,
    ) -> RGBAImage:
        """Shade one frame from the parameters as they are right now."""
        snap = as_snapshot(params)
        intensity = shade_interior(self.field, snap, self.workers)
        image = intensity_to_rgba(intensity, out)

        self.last_snapshot = snap
        self.frame_count += 1
        return image

    def frames(
        self,
        params: ParameterSet,
        count: int | None = None,
    ) -> Iterator[RGBAImage]:
        """
        Yield frames continuously, one per display refresh.

        Args:
            params: Live ParameterSet, re-read at the start of every frame
            count: Stop after this many frames (None = run until closed)
        """
        produced = 0
        while count is None or produced < count:
            yield self.render_frame(params)
            produced += 1
