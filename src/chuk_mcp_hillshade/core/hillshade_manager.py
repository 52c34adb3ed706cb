"""
Hillshade Manager: rendering session orchestrator.

Owns the session's height field, its live ParameterSet, and a per-frame
renderer. Public async methods run the numpy shading passes via
asyncio.to_thread() and store rendered PNGs in the artifact store.
"""

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass
from typing import Any

from numpy.typing import ArrayLike

from ..constants import (
    ALL_STRATEGIES,
    DEFAULT_STRATEGY,
    DEFAULT_WORKERS,
    INTENSITY_SCALE,
    MAX_WORKERS,
    EnvVar,
    ErrorMessages,
    RenderStrategy,
)
from .height_field import HeightField
from .parameters import ParameterSet
from .shading import compute_intensity, compute_normal
from .shading_pass import FrameRenderer, render_shaded_image

logger = logging.getLogger(__name__)


@dataclass
class FieldInfo:
    """Summary of a loaded height field."""

    shape: list[int]
    interior_pixels: int
    elevation_range: list[float]


@dataclass
class RenderResult:
    """Result of a shading pass stored as a PNG artifact."""

    artifact_ref: str
    strategy: str
    shape: list[int]
    value_range: list[float]
    frame_count: int
    parameters: dict[str, float]


@dataclass
class PixelResult:
    """Normal and intensity of a single interior pixel."""

    row: int
    col: int
    elevation: float
    normal: list[float]
    intensity: float
    grey_level: int


def _workers_from_env() -> int:
    raw = os.environ.get(EnvVar.RENDER_WORKERS)
    if not raw:
        return DEFAULT_WORKERS
    try:
        workers = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {EnvVar.RENDER_WORKERS}={raw!r}")
        return DEFAULT_WORKERS
    if not 1 <= workers <= MAX_WORKERS:
        logger.warning(f"Ignoring out-of-range {EnvVar.RENDER_WORKERS}={workers}")
        return DEFAULT_WORKERS
    return workers


class HillshadeManager:
    """Central manager for one relief-shading session."""

    def __init__(self, workers: int | None = None) -> None:
        self.workers = workers if workers is not None else _workers_from_env()
        self.parameters = ParameterSet()
        self.render_count = 0

        self._field: HeightField | None = None
        self._frame_renderer: FrameRenderer | None = None

    # ------------------------------------------------------------------
    # Session state (sync, no I/O)
    # ------------------------------------------------------------------

    @property
    def field(self) -> HeightField | None:
        return self._field

    def require_field(self) -> HeightField:
        if self._field is None:
            raise RuntimeError(ErrorMessages.NO_FIELD_LOADED)
        return self._field

    def load_field(self, elevation: ArrayLike, normalize: bool = False) -> FieldInfo:
        """
        Replace the session's height field.

        Args:
            elevation: 2-D grid, row-major, values in [0, 1] unless normalize
            normalize: Min-max scale the grid to [0, 1] before loading
        """
        from . import image_io

        if normalize:
            elevation = image_io.normalize_elevation(elevation)

        field = HeightField(elevation)
        self._field = field
        self._frame_renderer = FrameRenderer(field, self.workers)

        rows, cols = field.interior_shape
        logger.info(f"Loaded height field {field.height}x{field.width}")

        return FieldInfo(
            shape=list(field.shape),
            interior_pixels=rows * cols,
            elevation_range=[float(field.data.min()), float(field.data.max())],
        )

    def get_parameters(self) -> dict[str, float]:
        return self.parameters.to_dict()

    def update_parameters(self, **changes: float) -> dict[str, float]:
        """Apply controller changes; returns the resulting parameter values."""
        self.parameters.update(**changes)
        logger.info(f"Updated shading parameters: {sorted(changes)}")
        return self.parameters.to_dict()

    # ------------------------------------------------------------------
    # Rendering (async)
    # ------------------------------------------------------------------

    async def render(
        self,
        strategy: str = DEFAULT_STRATEGY,
        workers: int | None = None,
    ) -> RenderResult:
        """Shade the loaded field and store the image as a PNG artifact."""
        from . import image_io

        if strategy not in ALL_STRATEGIES:
            raise ValueError(
                ErrorMessages.UNKNOWN_STRATEGY.format(strategy, ", ".join(ALL_STRATEGIES))
            )
        field = self.require_field()
        snap = self.parameters.snapshot()

        if strategy == RenderStrategy.FRAME:
            renderer = self._frame_renderer or FrameRenderer(field, self.workers)
            self._frame_renderer = renderer
            image = await asyncio.to_thread(renderer.render_frame, snap)
            frame_count = renderer.frame_count
        else:
            band_workers = workers if workers is not None else self.workers
            image = await asyncio.to_thread(render_shaded_image, field, snap, None, band_workers)
            frame_count = 0

        self.render_count += 1
        png_bytes = await asyncio.to_thread(image_io.rgba_to_png, image)

        artifact_ref = await self._store_image(
            png_bytes,
            {
                "schema_version": "1.0",
                "type": "hillshade",
                "strategy": strategy,
                "shape": list(field.shape),
                "parameters": snap.to_dict(),
            },
        )
        logger.info(f"Rendered {field.height}x{field.width} hillshade ({strategy}) -> {artifact_ref}")

        return RenderResult(
            artifact_ref=artifact_ref,
            strategy=strategy,
            shape=list(field.shape),
            value_range=image_io.intensity_range(image),
            frame_count=frame_count,
            parameters=snap.to_dict(),
        )

    async def sample_pixel(self, row: int, col: int) -> PixelResult:
        """Normal and intensity at one interior pixel under current parameters."""
        field = self.require_field()
        if not field.is_interior(row, col):
            raise IndexError(
                ErrorMessages.NOT_INTERIOR.format(row, col, field.height - 2, field.width - 2)
            )

        snap = self.parameters.snapshot()
        normal = compute_normal(field, snap.exaggeration, row, col)
        intensity = compute_intensity(normal, snap)
        grey = int(round(min(max(intensity * INTENSITY_SCALE, 0.0), INTENSITY_SCALE)))

        return PixelResult(
            row=row,
            col=col,
            elevation=field.sample(row, col),
            normal=[float(v) for v in normal],
            intensity=intensity,
            grey_level=grey,
        )

    # ------------------------------------------------------------------
    # Artifact storage
    # ------------------------------------------------------------------

    def _get_store(self) -> Any:
        """Get the artifact store instance."""
        from chuk_mcp_server import get_artifact_store

        store = get_artifact_store()
        if store is None:
            raise RuntimeError(ErrorMessages.NO_ARTIFACT_STORE)
        return store

    async def _store_image(self, data: bytes, metadata: dict) -> str:
        """Store PNG data in the artifact store."""
        try:
            store = self._get_store()
            ref = f"hillshade/{uuid.uuid4().hex[:12]}.png"

            await store.store(
                ref,
                data,
                mime_type="image/png",
                metadata=metadata,
                summary=f"Hillshade render ({metadata.get('strategy', 'unknown')})",
            )
            return ref
        except Exception as e:
            logger.error(f"Failed to store image: {e}")
            raise
