"""Injected random colour selection.

The renderer never calls an ambient RNG: it asks a :class:`ColorSource`
for each colour, so a fixed seed reproduces a render exactly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from landolt_stimulus.stimulus.errors import EmptyPaletteError
from landolt_stimulus.stimulus.types import Color


def validate_palette(name: str, palette: Sequence[Color]) -> tuple[Color, ...]:
    """Return *palette* as a tuple, rejecting empty palettes."""
    colors = tuple(palette)
    if not colors:
        raise EmptyPaletteError(f"{name} palette must contain at least one colour")
    return colors


class ColorSource(ABC):
    """Capability that draws one colour uniformly from a palette."""

    @abstractmethod
    def pick(self, palette: Sequence[Color]) -> Color:
        ...


class SeededColorSource(ColorSource):
    """Uniform picks backed by a numpy ``Generator``.

    Parameters
    ----------
    seed : int | None
        Seed for ``np.random.default_rng``.  ``None`` draws fresh OS
        entropy, so only seeded sources are reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def pick(self, palette: Sequence[Color]) -> Color:
        if len(palette) == 0:
            raise EmptyPaletteError("cannot pick from an empty palette")
        return palette[int(self._rng.integers(len(palette)))]
