"""
Image helpers around the shading core.

All functions are synchronous; callers wrap them in asyncio.to_thread().
Handles elevation normalisation for raw grids, RGBA-to-PNG encoding, and
summary statistics of rendered intensities.
"""

import io
import logging
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from PIL import Image

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating[Any]]


def normalize_elevation(elevation: ArrayLike) -> FloatArray:
    """
    Min-max scale an elevation grid to [0, 1].

    A constant grid maps to all zeros. Non-finite cells are left as they are,
    so HeightField construction still rejects them.
    """
    arr = np.asarray(elevation, dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return arr.copy()

    vmin, vmax = float(finite.min()), float(finite.max())
    if vmax == vmin:
        logger.debug("Constant elevation grid; normalising to zeros")
        return np.where(np.isfinite(arr), 0.0, arr)

    return (arr - vmin) / (vmax - vmin)


def rgba_to_png(image: NDArray[np.uint8]) -> bytes:
    """Encode an (height, width, 4) uint8 RGBA buffer as PNG bytes."""
    img = Image.fromarray(np.ascontiguousarray(image))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def intensity_range(image: NDArray[np.uint8]) -> list[float]:
    """[min, max] grey level over opaque (interior) pixels, or [0, 0] if none."""
    opaque = image[..., 3] > 0
    if not np.any(opaque):
        return [0.0, 0.0]
    grey = image[..., 0][opaque]
    return [float(grey.min()), float(grey.max())]
