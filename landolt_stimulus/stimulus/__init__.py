"""
Stimulus module.

Value types, the gap/annulus classification and the renderer that turns
a circle layout into canvas draw calls.
"""

from landolt_stimulus.stimulus.errors import (
    EmptyPaletteError,
    InvalidDirectionError,
    InvalidParameterError,
    StimulusError,
)
from landolt_stimulus.stimulus.palette import ColorSource, SeededColorSource
from landolt_stimulus.stimulus.renderer import (
    StimulusRenderer,
    classify,
    compute_canvas_size,
    gap_bounds,
)
from landolt_stimulus.stimulus.types import (
    Circle,
    Classification,
    Direction,
    GapBounds,
    StimulusGeometry,
    ViewingParameters,
)

__all__ = [
    "Circle",
    "Classification",
    "ColorSource",
    "Direction",
    "EmptyPaletteError",
    "GapBounds",
    "InvalidDirectionError",
    "InvalidParameterError",
    "SeededColorSource",
    "StimulusError",
    "StimulusGeometry",
    "StimulusRenderer",
    "ViewingParameters",
    "classify",
    "compute_canvas_size",
    "gap_bounds",
]
