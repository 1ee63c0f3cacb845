"""Tests for gap bounds and circle classification.

Validates:
    - Literal gap-box table for every direction
    - Direction parsing and rejection of unknown values
    - Circles outside the 1/3..2/3 annulus are always FIELD
    - Annulus circles inside the direction's gap box are FIELD, others RING
    - Each direction is evaluated against its own box

Run:
    pytest tests/test_classification.py -v
"""

from __future__ import annotations

import pytest

from landolt_stimulus.stimulus.errors import (
    InvalidDirectionError,
    InvalidParameterError,
)
from landolt_stimulus.stimulus.renderer import classify, gap_bounds
from landolt_stimulus.stimulus.types import (
    Circle,
    Classification,
    Direction,
    GapBounds,
)

FIELD = Classification.FIELD
RING = Classification.RING
SIXTH = 1 / 6.0


# ---------------------------------------------------------------------------
# Direction
# ---------------------------------------------------------------------------


class TestDirection:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("up", Direction.UP),
            ("DOWN", Direction.DOWN),
            (" Left ", Direction.LEFT),
            ("right", Direction.RIGHT),
            (Direction.UP, Direction.UP),
        ],
    )
    def test_parse(self, value, expected: Direction) -> None:
        assert Direction.parse(value) is expected

    @pytest.mark.parametrize("value", ["north", "", None, 0, "u p"])
    def test_parse_rejects_unknown(self, value) -> None:
        with pytest.raises(InvalidDirectionError, match="direction must be one of"):
            Direction.parse(value)


# ---------------------------------------------------------------------------
# Gap bounds
# ---------------------------------------------------------------------------


class TestGapBounds:
    @pytest.mark.parametrize(
        "direction, expected",
        [
            (Direction.UP, (-SIXTH, SIXTH, -1.0, 0.0)),
            (Direction.DOWN, (-SIXTH, SIXTH, 0.0, 1.0)),
            (Direction.LEFT, (-1.0, 0.0, -SIXTH, SIXTH)),
            (Direction.RIGHT, (0.0, 1.0, -SIXTH, SIXTH)),
        ],
    )
    def test_table(self, direction: Direction, expected) -> None:
        b = gap_bounds(direction)
        assert (b.x_min, b.x_max, b.y_min, b.y_max) == pytest.approx(expected)

    @pytest.mark.parametrize("direction", list(Direction))
    def test_area_is_one_third(self, direction: Direction) -> None:
        b = gap_bounds(direction)
        assert b.area == pytest.approx(1 / 3.0)
        assert sorted([b.width, b.height]) == pytest.approx([1 / 3.0, 1.0])

    @pytest.mark.parametrize("value", ["up", None, 3, Classification.RING])
    def test_unknown_direction_raises(self, value) -> None:
        with pytest.raises(InvalidDirectionError):
            gap_bounds(value)

    def test_contains_is_inclusive(self) -> None:
        b = GapBounds(-1.0, 1.0, 0.0, 0.5)
        assert b.contains(-1.0, 0.0)
        assert b.contains(1.0, 0.5)
        assert not b.contains(1.0001, 0.25)
        assert not b.contains(0.0, -0.0001)


# ---------------------------------------------------------------------------
# Circle
# ---------------------------------------------------------------------------


class TestCircle:
    @pytest.mark.parametrize("r", [0.0, -0.1, float("nan"), float("inf")])
    def test_rejects_bad_radius(self, r: float) -> None:
        with pytest.raises(InvalidParameterError, match="circle r"):
            Circle(0.0, 0.0, r)

    @pytest.mark.parametrize(
        "x, y", [(float("nan"), 0.0), (0.0, float("inf")), ("0.5", 0.0)]
    )
    def test_rejects_bad_centre(self, x, y) -> None:
        with pytest.raises(InvalidParameterError, match="finite number"):
            Circle(x, y, 0.1)

    def test_centre_outside_disc_is_allowed(self) -> None:
        assert Circle(1.5, -2.0, 0.1).distance == pytest.approx(2.5)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestClassify:
    @pytest.mark.parametrize("direction", list(Direction))
    @pytest.mark.parametrize(
        "circle",
        [
            Circle(0.0, 0.0, 0.1),      # centre
            Circle(0.2, 0.1, 0.05),     # inner disc
            Circle(0.0, -0.9, 0.05),    # outer ring, inside UP box column
            Circle(0.7, 0.0, 0.05),     # outer ring, inside RIGHT box row
            Circle(-0.6, -0.6, 0.05),   # outer ring diagonal
        ],
    )
    def test_outside_annulus_is_field(self, circle: Circle, direction: Direction) -> None:
        assert classify(circle, gap_bounds(direction)) is FIELD

    def test_up_gap_circle(self) -> None:
        c = Circle(0.0, -0.5, 0.05)
        assert classify(c, gap_bounds(Direction.UP)) is FIELD
        assert classify(c, gap_bounds(Direction.DOWN)) is RING

    def test_same_circle_reevaluated_per_direction(self) -> None:
        c = Circle(0.05, -0.45, 0.05)
        assert classify(c, gap_bounds(Direction.UP)) is FIELD
        assert classify(c, gap_bounds(Direction.RIGHT)) is RING
        assert classify(c, gap_bounds(Direction.LEFT)) is RING

    @pytest.mark.parametrize(
        "direction, circle",
        [
            (Direction.DOWN, Circle(0.1, 0.5, 0.05)),
            (Direction.LEFT, Circle(-0.5, 0.1, 0.05)),
            (Direction.RIGHT, Circle(0.5, -0.1, 0.05)),
        ],
    )
    def test_gap_for_each_direction(self, direction: Direction, circle: Circle) -> None:
        assert classify(circle, gap_bounds(direction)) is FIELD
        others = [d for d in Direction if d is not direction]
        for other in others:
            assert classify(circle, gap_bounds(other)) is RING

    def test_annulus_edges_are_ring(self) -> None:
        bounds = gap_bounds(Direction.UP)
        assert classify(Circle(1 / 3.0, 0.0, 0.01), bounds) is RING
        assert classify(Circle(2 / 3.0, 0.0, 0.01), bounds) is RING
        assert classify(Circle(0.3, 0.0, 0.01), bounds) is FIELD
        assert classify(Circle(0.7, 0.0, 0.01), bounds) is FIELD

    def test_gap_edge_is_field(self) -> None:
        # x exactly on the box edge counts as inside the gap
        assert classify(Circle(SIXTH, -0.5, 0.01), gap_bounds(Direction.UP)) is FIELD
        assert classify(Circle(0.2, -0.5, 0.01), gap_bounds(Direction.UP)) is RING

    def test_radius_does_not_affect_classification(self) -> None:
        bounds = gap_bounds(Direction.LEFT)
        assert classify(Circle(0.0, 0.5, 0.01), bounds) is classify(
            Circle(0.0, 0.5, 0.3), bounds
        )
