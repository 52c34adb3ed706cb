"""
Height field: immutable 2D grid of normalised elevation samples.

Values are expected in [0, 1]; normalisation is done by whoever decodes the
source raster, never here.
"""

import logging
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..constants import BORDER_WIDTH, MIN_FIELD_SIZE, ErrorMessages

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating[Any]]


class HeightField:
    """Read-only row-major elevation grid with bounds-checked sampling."""

    __slots__ = ("_data",)

    def __init__(self, data: ArrayLike) -> None:
        array = np.array(data, dtype=np.float64, copy=True)

        if array.ndim != 2:
            raise ValueError(ErrorMessages.FIELD_NOT_2D.format(array.ndim))

        rows, cols = array.shape
        if rows < MIN_FIELD_SIZE or cols < MIN_FIELD_SIZE:
            raise ValueError(ErrorMessages.FIELD_TOO_SMALL.format(MIN_FIELD_SIZE, rows, cols))

        bad = int(np.count_nonzero(~np.isfinite(array)))
        if bad:
            raise ValueError(ErrorMessages.FIELD_NOT_FINITE.format(bad))

        array.setflags(write=False)
        self._data = array

    @classmethod
    def from_rows(cls, rows: list[list[float]]) -> "HeightField":
        """Build a height field from nested lists (one list per row)."""
        if rows and len({len(r) for r in rows}) > 1:
            raise ValueError(ErrorMessages.FIELD_RAGGED)
        return cls(rows)

    @property
    def data(self) -> FloatArray:
        """The underlying read-only array, shape (height, width)."""
        return self._data

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    @property
    def interior_shape(self) -> tuple[int, int]:
        return self.height - 2 * BORDER_WIDTH, self.width - 2 * BORDER_WIDTH

    def is_interior(self, row: int, col: int) -> bool:
        """True when (row, col) has both neighbours on each axis."""
        return (
            BORDER_WIDTH <= row < self.height - BORDER_WIDTH
            and BORDER_WIDTH <= col < self.width - BORDER_WIDTH
        )

    def sample(self, row: int, col: int) -> float:
        """Elevation at (row, col).

        Raises:
            IndexError: if the position lies outside the grid. Negative
                indices are rejected rather than wrapped.
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                ErrorMessages.SAMPLE_OUT_OF_RANGE.format(row, col, self.height, self.width)
            )
        return float(self._data[row, col])

    def __repr__(self) -> str:
        return f"HeightField(height={self.height}, width={self.width})"
