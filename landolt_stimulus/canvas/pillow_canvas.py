"""Offscreen Pillow canvas.

Draws into a ``PIL.Image`` in RGB mode.  With ``antialias > 1`` the
surface is allocated at that multiple of the requested size and
downsampled with Lanczos on export, which smooths circle edges without
changing the output size.

Rendering offscreen and saving only on success gives callers an atomic
result: a failed render never produces a partial image file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from landolt_stimulus.canvas.base import Canvas, CoordinateFrame
from landolt_stimulus.utils import fs
from landolt_stimulus.utils.color import BLACK, Color, unpack_rgb

logger = logging.getLogger(__name__)


class PillowCanvas(Canvas):
    """RGB image surface backed by Pillow.

    Parameters
    ----------
    antialias : int
        Supersampling factor (>= 1).  1 draws directly at output size.
    """

    def __init__(self, antialias: int = 1) -> None:
        if antialias < 1:
            raise ValueError(f"antialias must be >= 1, got {antialias}")
        self.antialias = antialias
        self._image: Image.Image | None = None
        self._draw: ImageDraw.ImageDraw | None = None
        self._frame = CoordinateFrame()
        self._fill: tuple[int, int, int] | None = None
        self._width = 0
        self._height = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def resize(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self._width, self._height = width, height
        k = self.antialias
        self._image = Image.new("RGB", (width * k, height * k), unpack_rgb(BLACK))
        self._draw = ImageDraw.Draw(self._image)
        self._frame = CoordinateFrame()
        logger.debug("Allocated %dx%d canvas (x%d supersampling)", width, height, k)

    def clear_to_color(self, color: Color) -> None:
        self._require_surface().rectangle(
            [0, 0, self._image.width, self._image.height], fill=unpack_rgb(color)
        )

    def set_transform(self, frame: CoordinateFrame) -> None:
        self._frame = frame

    def set_fill_color(self, color: Color) -> None:
        self._fill = unpack_rgb(color)

    def fill_circle(self, center_x: float, center_y: float, diameter: float) -> None:
        draw = self._require_surface()
        if self._fill is None:
            raise RuntimeError("fill_circle called before set_fill_color")
        k = self.antialias
        px, py = self._frame.to_pixels(center_x, center_y)
        radius = self._frame.length_to_pixels(diameter) / 2.0
        # Pillow includes the end coordinate, so stop one pixel short of it
        x0, y0 = k * (px - radius), k * (py - radius)
        x1 = max(x0, k * (px + radius) - 1)
        y1 = max(y0, k * (py + radius) - 1)
        draw.ellipse([x0, y0, x1, y1], fill=self._fill)

    # -- export ---------------------------------------------------------

    def to_image(self) -> Image.Image:
        """Copy of the surface at output resolution."""
        if self._image is None:
            raise RuntimeError("Canvas has not been sized; call resize() first")
        if self.antialias == 1:
            return self._image.copy()
        return self._image.resize((self._width, self._height), Image.Resampling.LANCZOS)

    def to_array(self) -> np.ndarray:
        """Surface as a ``(H, W, 3)`` uint8 array."""
        return np.asarray(self.to_image(), dtype=np.uint8)

    def save(self, path: str | Path) -> None:
        """Write the surface atomically; format follows the extension."""
        fs.atomic_save_image(self.to_image(), path)
        logger.info("Saved stimulus to %s", path)

    def _require_surface(self) -> ImageDraw.ImageDraw:
        if self._draw is None:
            raise RuntimeError("Canvas has not been sized; call resize() first")
        return self._draw
