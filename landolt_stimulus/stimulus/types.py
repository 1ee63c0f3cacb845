"""Value types for the Landolt-ring stimulus.

Every type is an immutable dataclass or enum.  Geometry uses
**normalized disc coordinates**: the enclosing disc has radius 1 and is
centred on the origin, with +Y pointing *down* (so "up" is negative y).
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum

from landolt_stimulus.stimulus.errors import (
    InvalidDirectionError,
    InvalidParameterError,
)
from landolt_stimulus.utils.color import Color

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Palette = tuple[Color, ...]
"""Non-empty ordered sequence of colours."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Direction(Enum):
    """Side of the annulus occupied by the gap."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Direction | str) -> Direction:
        """Coerce a ``Direction`` or case-insensitive name.

        Raises
        ------
        InvalidDirectionError
            If *value* names none of the four directions.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidDirectionError(
            f"direction must be one of "
            f"{', '.join(d.value for d in cls)}, got {value!r}"
        )


class Classification(Enum):
    """Colour group a circle is painted with."""

    FIELD = "field"
    RING = "ring"


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Circle:
    """One pre-positioned circle of the layout.

    Parameters
    ----------
    x, y : float
        Centre in normalized disc coordinates.
    r : float
        Radius in the same normalized units.

    Raises
    ------
    InvalidParameterError
        If the centre is not finite or the radius is not > 0.
    """

    x: float
    y: float
    r: float

    def __post_init__(self) -> None:
        for name in ("x", "y"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InvalidParameterError(
                    f"circle {name} must be a finite number, got {value!r}"
                )
        _require_positive("circle r", self.r)

    @property
    def distance(self) -> float:
        """Distance of the centre from the disc origin."""
        return math.hypot(self.x, self.y)


@dataclass(frozen=True, slots=True)
class GapBounds:
    """Axis-aligned box of the ring gap, inclusive on every edge."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def area(self) -> float:
        return self.width * self.height


# ---------------------------------------------------------------------------
# Viewing geometry
# ---------------------------------------------------------------------------


def _require_positive(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(
            f"{name} must be a number, got {value!r}"
        ) from None
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidParameterError(f"{name} must be > 0, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class ViewingParameters:
    """Observer distance and display pixel density.

    Parameters
    ----------
    distance_m : float
        Distance from the observer's eye to the screen (m).
    pixels_per_meter : float
        Display pixel density (px/m): screen width in pixels divided by
        screen width in meters.
    """

    distance_m: float
    pixels_per_meter: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "distance_m", _require_positive("distance_m", self.distance_m)
        )
        object.__setattr__(
            self,
            "pixels_per_meter",
            _require_positive("pixels_per_meter", self.pixels_per_meter),
        )

    @classmethod
    def from_screen(
        cls,
        distance_m: float,
        screen_width_px: float,
        screen_width_m: float,
    ) -> ViewingParameters:
        """Derive pixel density from the physical screen width."""
        width_px = _require_positive("screen_width_px", screen_width_px)
        width_m = _require_positive("screen_width_m", screen_width_m)
        return cls(distance_m=distance_m, pixels_per_meter=width_px / width_m)

    @property
    def pixels_per_degree(self) -> float:
        """Pixels subtended by one degree of visual angle (unrounded)."""
        return (
            self.distance_m * math.tan(math.radians(1.0)) * self.pixels_per_meter
        )


@dataclass(frozen=True, slots=True)
class StimulusGeometry:
    """Derived pixel geometry of one render."""

    size_px: int
    pixels_per_degree: float
