"""Landolt-ring stimulus renderer.

Draws a disc tiled by pre-positioned circles.  Circles in the annulus
``1/3 <= d <= 2/3`` form a C in ring colours; the gap of the C, the
inner disc and the outer ring use field colours.  The image spans
exactly 2 degrees of visual angle at the given viewing distance.

Pipeline of :meth:`StimulusRenderer.render`:

    validate inputs  →  size + clear canvas  →  set coordinate frame
    →  classify and fill each circle in input order

Every precondition is checked before the first canvas call, so an
invalid request leaves the canvas untouched.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from landolt_stimulus.canvas.base import Canvas, CoordinateFrame
from landolt_stimulus.stimulus.errors import (
    InvalidDirectionError,
    InvalidParameterError,
)
from landolt_stimulus.stimulus.palette import (
    ColorSource,
    SeededColorSource,
    validate_palette,
)
from landolt_stimulus.stimulus.types import (
    Circle,
    Classification,
    Color,
    Direction,
    GapBounds,
    StimulusGeometry,
    ViewingParameters,
)
from landolt_stimulus.utils.color import BLACK

logger = logging.getLogger(__name__)

FIELD_OF_VIEW_DEG = 2
RING_INNER = 1 / 3.0
RING_OUTER = 2 / 3.0
CUT_HALF_WIDTH = 1 / 6.0

_GAP_BOUNDS: dict[Direction, GapBounds] = {
    Direction.UP: GapBounds(-CUT_HALF_WIDTH, CUT_HALF_WIDTH, -1.0, 0.0),
    Direction.DOWN: GapBounds(-CUT_HALF_WIDTH, CUT_HALF_WIDTH, 0.0, 1.0),
    Direction.LEFT: GapBounds(-1.0, 0.0, -CUT_HALF_WIDTH, CUT_HALF_WIDTH),
    Direction.RIGHT: GapBounds(0.0, 1.0, -CUT_HALF_WIDTH, CUT_HALF_WIDTH),
}


# ---------------------------------------------------------------------------
# Pure geometry
# ---------------------------------------------------------------------------


def compute_canvas_size(distance_m: float, pixels_per_meter: float) -> int:
    """Side length in pixels of a square spanning 2 degrees.

    ``2 * round(distance_m * tan(1 deg) * pixels_per_meter)``, rounded
    half-up exactly once so the result is always even.

    Raises
    ------
    InvalidParameterError
        If either input is not > 0, or the geometry is too small to
        cover a single pixel per degree.
    """
    viewing = ViewingParameters(distance_m, pixels_per_meter)
    pixels_per_degree = int(math.floor(viewing.pixels_per_degree + 0.5))
    if pixels_per_degree < 1:
        raise InvalidParameterError(
            f"viewing geometry yields {viewing.pixels_per_degree:.3f} px per "
            f"degree; the stimulus would be empty"
        )
    return FIELD_OF_VIEW_DEG * pixels_per_degree


def gap_bounds(direction: Direction) -> GapBounds:
    """Box of the C's opening for *direction*, in normalized units.

    Raises
    ------
    InvalidDirectionError
        If *direction* is not a :class:`Direction` member.
    """
    try:
        return _GAP_BOUNDS[direction]
    except (KeyError, TypeError):
        raise InvalidDirectionError(
            f"direction must be a Direction, got {direction!r}"
        ) from None


def classify(circle: Circle, bounds: GapBounds) -> Classification:
    """Colour group of *circle* given the gap box of the current direction."""
    d = circle.distance
    if d > RING_OUTER or d < RING_INNER:
        return Classification.FIELD
    if bounds.contains(circle.x, circle.y):
        return Classification.FIELD
    return Classification.RING


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class StimulusRenderer:
    """Computes pixel geometry and issues draw calls on a canvas.

    Parameters
    ----------
    canvas : Canvas
        Host drawing surface.  The renderer is its only writer during a
        call; do not share one canvas across threads.
    color_source : ColorSource | None
        Colour picker.  ``None`` uses an unseeded
        :class:`SeededColorSource`.
    """

    def __init__(
        self,
        canvas: Canvas,
        color_source: ColorSource | None = None,
    ) -> None:
        self.canvas = canvas
        self.color_source = color_source or SeededColorSource()

    def compute_canvas_size(self, viewing: ViewingParameters) -> int:
        """Size the canvas for *viewing* and clear it to black."""
        size_px = compute_canvas_size(viewing.distance_m, viewing.pixels_per_meter)
        self.canvas.resize(size_px, size_px)
        self.canvas.clear_to_color(BLACK)
        return size_px

    def establish_coordinate_frame(self) -> CoordinateFrame:
        """Map the normalized disc onto the whole (square) canvas."""
        frame = CoordinateFrame.for_canvas(self.canvas.width)
        self.canvas.set_transform(frame)
        return frame

    def classify_and_draw(
        self,
        circles: Iterable[Circle],
        field_colors: Sequence[Color],
        ring_colors: Sequence[Color],
        direction: Direction,
    ) -> None:
        """Fill every circle, in order, with a colour from its group.

        Each circle gets an independent pick; later circles paint over
        earlier ones.
        """
        bounds = gap_bounds(direction)
        palettes = {
            Classification.FIELD: field_colors,
            Classification.RING: ring_colors,
        }
        counts = {Classification.FIELD: 0, Classification.RING: 0}

        for c in circles:
            group = classify(c, bounds)
            counts[group] += 1
            self.canvas.set_fill_color(self.color_source.pick(palettes[group]))
            self.canvas.fill_circle(c.x, c.y, 2 * c.r)

        logger.debug(
            "Drew %d field and %d ring circles (gap %s)",
            counts[Classification.FIELD],
            counts[Classification.RING],
            direction.value,
        )

    def render(
        self,
        circles: Sequence[Circle],
        field_colors: Sequence[Color],
        ring_colors: Sequence[Color],
        direction: Direction | str,
        viewing: ViewingParameters,
    ) -> StimulusGeometry:
        """Render one stimulus.

        Parameters
        ----------
        circles : Sequence[Circle]
            Layout in normalized disc coordinates, in draw order.
        field_colors, ring_colors : Sequence[Color]
            Non-empty palettes for the field and the C.
        direction : Direction | str
            Side the C opens towards.
        viewing : ViewingParameters
            Observer distance and display pixel density.

        Returns
        -------
        StimulusGeometry
            Canvas size and unrounded pixels per degree.

        Raises
        ------
        InvalidParameterError, InvalidDirectionError, EmptyPaletteError
            Before any canvas call is made.
        """
        direction = Direction.parse(direction)
        field_colors = validate_palette("field", field_colors)
        ring_colors = validate_palette("ring", ring_colors)
        # Size check up front so a degenerate geometry never resizes the canvas
        compute_canvas_size(viewing.distance_m, viewing.pixels_per_meter)

        size_px = self.compute_canvas_size(viewing)
        self.establish_coordinate_frame()
        self.classify_and_draw(circles, field_colors, ring_colors, direction)

        logger.info(
            "Rendered %d circles on %dx%d px canvas (%.2f px/deg, gap %s)",
            len(circles), size_px, size_px,
            viewing.pixels_per_degree, direction.value,
        )
        return StimulusGeometry(
            size_px=size_px,
            pixels_per_degree=viewing.pixels_per_degree,
        )
