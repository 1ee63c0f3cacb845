"""Drawing-surface abstraction used by the stimulus renderer.

The renderer only ever talks to a :class:`Canvas`.  Concrete surfaces
(an offscreen Pillow image, a call recorder, a window toolkit) live
behind it so the renderer stays a pure function of its inputs plus this
one side-effecting collaborator.

Coordinates passed to :meth:`Canvas.fill_circle` are expressed in the
units of the active :class:`CoordinateFrame`; before any transform is
set they are plain pixels.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from landolt_stimulus.utils.color import Color


@dataclass(frozen=True, slots=True)
class CoordinateFrame:
    """Scale + translate mapping from frame units to pixels.

    ``pixel = scale * (value + offset)`` on both axes.  The identity
    frame (``scale=1, offset=0``) is plain pixel space.

    Parameters
    ----------
    scale : float
        Pixels per frame unit.
    offset : float
        Translation applied in frame units before scaling.
    """

    scale: float = 1.0
    offset: float = 0.0

    @classmethod
    def for_canvas(cls, size_px: int) -> CoordinateFrame:
        """Normalized disc frame: ``[-1, 1]`` spans the whole canvas.

        Origin lands on the canvas centre, +Y stays downward.
        """
        return cls(scale=size_px / 2.0, offset=1.0)

    def to_pixels(self, x: float, y: float) -> tuple[float, float]:
        return (self.scale * (x + self.offset), self.scale * (y + self.offset))

    def length_to_pixels(self, length: float) -> float:
        return self.scale * length


class Canvas(ABC):
    """Host drawing surface."""

    @property
    @abstractmethod
    def width(self) -> int:
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        ...

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        """Allocate (or reallocate) the surface at ``width x height`` px."""

    @abstractmethod
    def clear_to_color(self, color: Color) -> None:
        """Fill the whole surface with *color*."""

    @abstractmethod
    def set_transform(self, frame: CoordinateFrame) -> None:
        """Replace the active coordinate frame."""

    @abstractmethod
    def set_fill_color(self, color: Color) -> None:
        """Colour used by subsequent fills."""

    @abstractmethod
    def fill_circle(self, center_x: float, center_y: float, diameter: float) -> None:
        """Fill a circle without outline, centred at the given point."""
