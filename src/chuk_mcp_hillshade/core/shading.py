"""
Shading kernel: surface normals and the reflectance model.

Every execution strategy (batch raster pass, per-frame renderer, single-pixel
queries) goes through the element-wise helpers in this module, so all of them
produce bit-identical intensities for the same inputs.

Normal estimation:
    dx = exaggeration * (z[i, j-1] - z[i, j+1])
    dy = exaggeration * (z[i+1, j] - z[i-1, j])
    N  = normalize(dx, dy, 2)

Reflectance:
    L = normalize(cos(phi) cos(theta), cos(phi) sin(theta), sin(phi))
    d = N . L
    R = 2 d N - L
    I = ambient + diffuse * d + specular * (R . V)^3,   V = (0, 0, 1)

Neither term is clamped and the specular exponent is odd, so surfaces facing
away from the light shade darker than the ambient level.
"""

import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..constants import (
    BORDER_WIDTH,
    DEGENERATE_NORMAL,
    NORMAL_Z,
    VIEW_VECTOR,
)
from .height_field import HeightField
from .parameters import ParameterSet, ParameterSnapshot, as_snapshot

FloatArray = NDArray[np.floating[Any]]


# ---------------------------------------------------------------------------
# Element-wise helpers (shared by scalar and vectorised paths)
# ---------------------------------------------------------------------------


def _unit_normals(dx: FloatArray, dy: FloatArray) -> FloatArray:
    """Normalise (dx, dy, NORMAL_Z) per element; zero or non-finite length -> DEGENERATE_NORMAL."""
    dz = np.full_like(dx, NORMAL_Z)

    # scale by the largest component so squaring cannot overflow
    with np.errstate(invalid="ignore", over="ignore"):
        scale = np.maximum(np.maximum(np.abs(dx), np.abs(dy)), dz)
        sx = dx / scale
        sy = dy / scale
        sz = dz / scale
        length = np.sqrt(sx * sx + sy * sy + sz * sz)

    degenerate = ~(np.isfinite(length) & (length > 0.0))
    safe = np.where(degenerate, 1.0, length)

    nx = np.where(degenerate, DEGENERATE_NORMAL[0], sx / safe)
    ny = np.where(degenerate, DEGENERATE_NORMAL[1], sy / safe)
    nz = np.where(degenerate, DEGENERATE_NORMAL[2], sz / safe)
    return np.stack([nx, ny, nz], axis=-1)


def _reflectance(normals: FloatArray, light: FloatArray, snap: ParameterSnapshot) -> FloatArray:
    nx, ny, nz = normals[..., 0], normals[..., 1], normals[..., 2]
    lx, ly, lz = float(light[0]), float(light[1]), float(light[2])
    vx, vy, vz = VIEW_VECTOR

    d = nx * lx + ny * ly + nz * lz

    rx = 2.0 * d * nx - lx
    ry = 2.0 * d * ny - ly
    rz = 2.0 * d * nz - lz
    rv = rx * vx + ry * vy + rz * vz

    # cubic keeps the sign of R.V
    return snap.ambient + snap.diffuse * d + snap.specular * (rv * rv * rv)


# ---------------------------------------------------------------------------
# Normal estimation
# ---------------------------------------------------------------------------


def compute_normal(field: HeightField, exaggeration: float, row: int, col: int) -> FloatArray:
    """
    Unit surface normal at one interior pixel by central differences.

    Args:
        field: Height field to sample
        exaggeration: Vertical relief multiplier
        row: Pixel row, 1 <= row < height - 1
        col: Pixel column, 1 <= col < width - 1

    Returns:
        Array of shape (3,). A zero-length raw normal yields (0, 0, 1).

    Raises:
        IndexError: if a neighbour sample falls outside the field
    """
    dx = exaggeration * (field.sample(row, col - 1) - field.sample(row, col + 1))
    dy = exaggeration * (field.sample(row + 1, col) - field.sample(row - 1, col))
    return _unit_normals(np.array([dx], dtype=np.float64), np.array([dy], dtype=np.float64))[0]


def estimate_gradients(
    data: FloatArray,
    exaggeration: float,
    row_start: int,
    row_stop: int,
) -> tuple[FloatArray, FloatArray]:
    """Scaled (dx, dy) for interior rows [row_start, row_stop), interior columns only."""
    b = BORDER_WIDTH
    left = data[row_start:row_stop, : -2 * b]
    right = data[row_start:row_stop, 2 * b :]
    up = data[row_start - b : row_stop - b, b:-b]
    down = data[row_start + b : row_stop + b, b:-b]

    dx = exaggeration * (left - right)
    dy = exaggeration * (down - up)
    return dx, dy


def estimate_normals(
    data: FloatArray,
    exaggeration: float,
    row_start: int | None = None,
    row_stop: int | None = None,
) -> FloatArray:
    """
    Unit normals for a band of interior rows.

    Args:
        data: Elevation array (height, width)
        exaggeration: Vertical relief multiplier
        row_start: First interior row (default 1)
        row_stop: One past the last interior row (default height - 1)

    Returns:
        Array of shape (row_stop - row_start, width - 2, 3)
    """
    row_start, row_stop = _row_band(data, row_start, row_stop)
    dx, dy = estimate_gradients(data, exaggeration, row_start, row_stop)
    return _unit_normals(dx, dy)


# ---------------------------------------------------------------------------
# Light model
# ---------------------------------------------------------------------------


def light_direction(azimuth: float, elevation_angle: float) -> FloatArray:
    """Unit vector toward the light; azimuth is reduced mod 360 first.

    Azimuths a multiple of 360 apart agree exactly when the reduction is exact
    (e.g. integer degrees); otherwise they may differ in the last ulp.
    """
    theta = math.radians(azimuth % 360.0)
    phi = math.radians(elevation_angle)

    lx = math.cos(phi) * math.cos(theta)
    ly = math.cos(phi) * math.sin(theta)
    lz = math.sin(phi)

    length = math.sqrt(lx * lx + ly * ly + lz * lz)
    return np.array([lx / length, ly / length, lz / length], dtype=np.float64)


def compute_intensity(
    normal: ArrayLike,
    params: ParameterSet | ParameterSnapshot,
) -> float:
    """
    Unclamped reflectance for one unit normal.

    Display scaling (x255, saturate) is the caller's job.
    """
    snap = as_snapshot(params)
    n = np.asarray(normal, dtype=np.float64).reshape(1, 3)
    light = light_direction(snap.azimuth, snap.elevation_angle)
    return float(_reflectance(n, light, snap)[0])


def compute_intensities(normals: FloatArray, params: ParameterSet | ParameterSnapshot) -> FloatArray:
    """Vectorised `compute_intensity` over an array of normals (..., 3)."""
    snap = as_snapshot(params)
    light = light_direction(snap.azimuth, snap.elevation_angle)
    return _reflectance(np.asarray(normals, dtype=np.float64), light, snap)


# ---------------------------------------------------------------------------
# Kernel
# ---------------------------------------------------------------------------


def shade_rows(
    data: FloatArray,
    snap: ParameterSnapshot,
    row_start: int | None = None,
    row_stop: int | None = None,
) -> FloatArray:
    """
    The shading kernel: normals plus reflectance for a band of interior rows.

    Pure function of its inputs. Returns unclamped intensities of shape
    (row_stop - row_start, width - 2).
    """
    normals = estimate_normals(data, snap.exaggeration, row_start, row_stop)
    light = light_direction(snap.azimuth, snap.elevation_angle)
    return _reflectance(normals, light, snap)


def _row_band(data: FloatArray, row_start: int | None, row_stop: int | None) -> tuple[int, int]:
    first = BORDER_WIDTH
    last = data.shape[0] - BORDER_WIDTH
    start = first if row_start is None else row_start
    stop = last if row_stop is None else row_stop
    if not (first <= start <= stop <= last):
        raise IndexError(f"Row band [{start}, {stop}) outside interior rows [{first}, {last})")
    return start, stop
