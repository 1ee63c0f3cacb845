"""
Canvas module.

The host drawing surface the renderer calls into, plus two concrete
surfaces: an offscreen Pillow image and a call recorder.
"""

from landolt_stimulus.canvas.base import Canvas, CoordinateFrame
from landolt_stimulus.canvas.pillow_canvas import PillowCanvas
from landolt_stimulus.canvas.recording import RecordingCanvas

__all__ = [
    "Canvas",
    "CoordinateFrame",
    "PillowCanvas",
    "RecordingCanvas",
]
