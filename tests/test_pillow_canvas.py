"""Tests for the offscreen Pillow canvas.

Validates:
    - Surface allocation, clearing and export shape/dtype
    - Circles land where the coordinate frame says (+Y down)
    - Painter's order: later fills cover earlier ones
    - Supersampling keeps the output size
    - Atomic save leaves no temporary files
    - End-to-end render through StimulusRenderer

Run:
    pytest tests/test_pillow_canvas.py -v
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from landolt_stimulus.canvas.base import CoordinateFrame
from landolt_stimulus.canvas.pillow_canvas import PillowCanvas
from landolt_stimulus.stimulus.palette import SeededColorSource
from landolt_stimulus.stimulus.renderer import StimulusRenderer
from landolt_stimulus.stimulus.types import Circle, Direction, ViewingParameters

RED = 0xFF0000
GREEN = 0x00FF00
BLUE = 0x0000FF


def _disc_canvas(size: int = 100, antialias: int = 1) -> PillowCanvas:
    canvas = PillowCanvas(antialias=antialias)
    canvas.resize(size, size)
    canvas.clear_to_color(0x000000)
    canvas.set_transform(CoordinateFrame.for_canvas(size))
    return canvas


# ---------------------------------------------------------------------------
# Surface basics
# ---------------------------------------------------------------------------


class TestSurface:
    def test_resize_and_export(self) -> None:
        canvas = PillowCanvas()
        canvas.resize(40, 40)
        arr = canvas.to_array()
        assert arr.shape == (40, 40, 3)
        assert arr.dtype == np.uint8
        assert canvas.width == 40 and canvas.height == 40

    def test_clear_to_color(self) -> None:
        canvas = PillowCanvas()
        canvas.resize(8, 8)
        canvas.clear_to_color(0x336699)
        arr = canvas.to_array()
        assert (arr == [0x33, 0x66, 0x99]).all()

    def test_new_surface_is_black(self) -> None:
        canvas = PillowCanvas()
        canvas.resize(8, 8)
        assert not canvas.to_array().any()

    def test_invalid_antialias(self) -> None:
        with pytest.raises(ValueError, match="antialias"):
            PillowCanvas(antialias=0)

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            PillowCanvas().resize(0, 10)

    def test_draw_before_resize(self) -> None:
        canvas = PillowCanvas()
        canvas.set_fill_color(RED)
        with pytest.raises(RuntimeError, match="resize"):
            canvas.fill_circle(0.0, 0.0, 1.0)

    def test_fill_before_color(self) -> None:
        canvas = PillowCanvas()
        canvas.resize(10, 10)
        with pytest.raises(RuntimeError, match="set_fill_color"):
            canvas.fill_circle(5.0, 5.0, 2.0)


# ---------------------------------------------------------------------------
# Drawing in the normalized frame
# ---------------------------------------------------------------------------


class TestFillCircle:
    def test_centre_circle(self) -> None:
        canvas = _disc_canvas()
        canvas.set_fill_color(RED)
        canvas.fill_circle(0.0, 0.0, 0.4)  # radius 10 px at (50, 50)
        arr = canvas.to_array()
        assert arr[50, 50].tolist() == [255, 0, 0]
        assert arr[50, 57].tolist() == [255, 0, 0]
        assert arr[50, 65].tolist() == [0, 0, 0]
        assert arr[0, 0].tolist() == [0, 0, 0]

    def test_negative_y_is_top(self) -> None:
        canvas = _disc_canvas()
        canvas.set_fill_color(GREEN)
        canvas.fill_circle(0.0, -0.5, 0.2)  # (50, 25), radius 5 px
        arr = canvas.to_array()
        assert arr[25, 50].tolist() == [0, 255, 0]
        assert arr[75, 50].tolist() == [0, 0, 0]

    def test_later_fill_covers_earlier(self) -> None:
        canvas = _disc_canvas()
        canvas.set_fill_color(RED)
        canvas.fill_circle(0.0, 0.0, 0.8)
        canvas.set_fill_color(BLUE)
        canvas.fill_circle(0.0, 0.0, 0.2)
        arr = canvas.to_array()
        assert arr[50, 50].tolist() == [0, 0, 255]
        assert arr[50, 65].tolist() == [255, 0, 0]

    @pytest.mark.parametrize(
        "size, diameter, expected_px",
        [
            (100, 0.4, 20),   # box on whole pixels
            (34, 1.0, 17),    # half-pixel box edges
        ],
    )
    def test_lit_span_equals_diameter(
        self, size: int, diameter: float, expected_px: int
    ) -> None:
        canvas = _disc_canvas(size=size)
        canvas.set_fill_color(RED)
        canvas.fill_circle(0.0, 0.0, diameter)
        lit = canvas.to_array()[:, :, 0] > 0
        assert lit.sum(axis=1).max() == expected_px
        assert lit.sum(axis=0).max() == expected_px

    def test_subpixel_circle_is_accepted(self) -> None:
        canvas = _disc_canvas(size=20)
        canvas.set_fill_color(RED)
        canvas.fill_circle(0.0, 0.0, 0.05)  # half a pixel across
        assert canvas.to_array().shape == (20, 20, 3)

    def test_antialias_keeps_output_size(self) -> None:
        canvas = _disc_canvas(size=60, antialias=4)
        canvas.set_fill_color(RED)
        canvas.fill_circle(0.0, 0.0, 1.0)
        img = canvas.to_image()
        assert img.size == (60, 60)
        arr = canvas.to_array()
        assert arr[30, 30, 0] >= 250
        assert arr[30, 30, 1:].max() <= 5
        assert arr[0, 0].max() <= 5


# ---------------------------------------------------------------------------
# Save and end-to-end
# ---------------------------------------------------------------------------


class TestSaveAndRender:
    def test_save_png(self, tmp_path: Path) -> None:
        canvas = _disc_canvas(size=20)
        out = tmp_path / "nested" / "stimulus.png"
        canvas.save(out)
        assert out.exists()
        with Image.open(out) as img:
            assert img.size == (20, 20)
        assert [p.name for p in out.parent.iterdir()] == ["stimulus.png"]

    def test_render_through_renderer(self) -> None:
        canvas = PillowCanvas()
        viewing = ViewingParameters(distance_m=1.0, pixels_per_meter=1000.0)
        circles = [
            Circle(0.0, 0.0, 0.2),    # field, centre
            Circle(0.5, 0.0, 0.15),   # ring (gap is up)
            Circle(0.0, -0.5, 0.15),  # gap -> field
        ]
        StimulusRenderer(canvas, SeededColorSource(1)).render(
            circles, (GREEN,), (RED,), Direction.UP, viewing,
        )
        arr = canvas.to_array()
        assert arr.shape == (34, 34, 3)
        assert arr[17, 17].tolist() == [0, 255, 0]
        assert arr[17, 25].tolist() == [255, 0, 0]    # x = 17 * 1.5
        assert arr[8, 17].tolist() == [0, 255, 0]     # y = 17 * 0.5
        assert arr[0, 0].tolist() == [0, 0, 0]
