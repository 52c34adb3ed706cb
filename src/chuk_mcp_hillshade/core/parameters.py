"""Shading parameters shared between the controller and the shading passes."""

import threading
from dataclasses import dataclass, field, fields
from typing import Any

from ..constants import (
    DEFAULT_AMBIENT,
    DEFAULT_AZIMUTH,
    DEFAULT_DIFFUSE,
    DEFAULT_ELEVATION_ANGLE,
    DEFAULT_EXAGGERATION,
    DEFAULT_SPECULAR,
    PARAMETER_NAMES,
    ErrorMessages,
)


@dataclass(frozen=True)
class ParameterSnapshot:
    """
    Immutable copy of a ParameterSet taken at one instant.

    A shading pass reads only a snapshot, so controller writes during a pass
    never produce a torn read.

    Attributes:
        ambient: Constant illumination term
        diffuse: Weight of the N·L term
        specular: Weight of the cubic reflection term
        exaggeration: Vertical relief multiplier applied before normal estimation
        azimuth: Horizontal light direction in degrees (any real, taken mod 360)
        elevation_angle: Light angle above the horizon in degrees
    """

    ambient: float = DEFAULT_AMBIENT
    diffuse: float = DEFAULT_DIFFUSE
    specular: float = DEFAULT_SPECULAR
    exaggeration: float = DEFAULT_EXAGGERATION
    azimuth: float = DEFAULT_AZIMUTH
    elevation_angle: float = DEFAULT_ELEVATION_ANGLE

    def as_uniforms(self) -> tuple[float, ...]:
        """Values in uniform-block order (see PARAMETER_NAMES)."""
        return tuple(float(getattr(self, name)) for name in PARAMETER_NAMES)

    def to_dict(self) -> dict[str, float]:
        return {name: float(getattr(self, name)) for name in PARAMETER_NAMES}


@dataclass
class ParameterSet:
    """
    Mutable bundle of shading controls.

    Written in place by an external controller (sliders, MCP tools) and read by
    shading passes through `snapshot()`. No value is ever rejected: negative
    coefficients or odd angles simply produce odd pictures.
    """

    ambient: float = DEFAULT_AMBIENT
    diffuse: float = DEFAULT_DIFFUSE
    specular: float = DEFAULT_SPECULAR
    exaggeration: float = DEFAULT_EXAGGERATION
    azimuth: float = DEFAULT_AZIMUTH
    elevation_angle: float = DEFAULT_ELEVATION_ANGLE
    _lock: Any = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> "ParameterSet":
        """Create a ParameterSet from a dictionary, defaulting missing keys."""
        _check_names(cfg)
        return cls(**{name: float(value) for name, value in cfg.items()})

    def update(self, **changes: float) -> None:
        """Apply several changes as one step with respect to `snapshot()`."""
        _check_names(changes)
        converted = {name: float(value) for name, value in changes.items()}
        with self._lock:
            for name, value in converted.items():
                setattr(self, name, value)

    def snapshot(self) -> ParameterSnapshot:
        with self._lock:
            return ParameterSnapshot(**{name: getattr(self, name) for name in PARAMETER_NAMES})

    def as_uniforms(self) -> tuple[float, ...]:
        return self.snapshot().as_uniforms()

    def to_dict(self) -> dict[str, float]:
        return self.snapshot().to_dict()


def as_snapshot(params: "ParameterSet | ParameterSnapshot") -> ParameterSnapshot:
    """Return `params` itself if already a snapshot, else take one."""
    if isinstance(params, ParameterSnapshot):
        return params
    return params.snapshot()


def _check_names(values: dict[str, Any]) -> None:
    known = {f.name for f in fields(ParameterSnapshot)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise TypeError(
            ErrorMessages.UNKNOWN_PARAMETER.format(", ".join(unknown), ", ".join(PARAMETER_NAMES))
        )
