"""Canvas that records calls instead of drawing.

Each call becomes an immutable operation dataclass, in call order.  Used
by ``--dry-run`` and by the tests to assert on exactly what the renderer
asked the host to draw.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass

from landolt_stimulus.canvas.base import Canvas, CoordinateFrame
from landolt_stimulus.utils.color import Color

# ---------------------------------------------------------------------------
# Recorded operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CanvasOp(ABC):
    """Base class for recorded canvas calls."""

    pass


@dataclass(frozen=True, slots=True)
class Resize(CanvasOp):
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class Clear(CanvasOp):
    color: Color


@dataclass(frozen=True, slots=True)
class SetTransform(CanvasOp):
    frame: CoordinateFrame


@dataclass(frozen=True, slots=True)
class SetFill(CanvasOp):
    color: Color


@dataclass(frozen=True, slots=True)
class FillCircle(CanvasOp):
    """A filled circle, with the fill colour active at call time."""

    center_x: float
    center_y: float
    diameter: float
    color: Color


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------


class RecordingCanvas(Canvas):
    """In-memory log of canvas calls."""

    def __init__(self) -> None:
        self.ops: list[CanvasOp] = []
        self._width = 0
        self._height = 0
        self._fill: Color | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def resize(self, width: int, height: int) -> None:
        self._width, self._height = width, height
        self.ops.append(Resize(width, height))

    def clear_to_color(self, color: Color) -> None:
        self.ops.append(Clear(color))

    def set_transform(self, frame: CoordinateFrame) -> None:
        self.ops.append(SetTransform(frame))

    def set_fill_color(self, color: Color) -> None:
        self._fill = color
        self.ops.append(SetFill(color))

    def fill_circle(self, center_x: float, center_y: float, diameter: float) -> None:
        if self._fill is None:
            raise RuntimeError("fill_circle called before set_fill_color")
        self.ops.append(FillCircle(center_x, center_y, diameter, self._fill))

    @property
    def circles(self) -> list[FillCircle]:
        """Recorded fills only, in draw order."""
        return [op for op in self.ops if isinstance(op, FillCircle)]
