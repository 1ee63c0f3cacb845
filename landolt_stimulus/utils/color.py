"""Colour value parsing and packing.

Provides:
    - pack_rgb / unpack_rgb: (r, g, b) bytes ↔ packed 0xRRGGBB int
    - parse_color: config value (hex string, int, [r, g, b]) → packed int
    - parse_palette: list of config values → tuple of packed ints
    - to_hex: packed int → "#rrggbb" (logging, metadata)

Invariants:
    - Colours are opaque; there is no alpha channel
    - Channel values are integers in [0, 255]
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

Color = int
"""Packed ``0xRRGGBB`` colour value."""

BLACK = 0x000000


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack three 8-bit channels into ``0xRRGGBB``.

    Raises
    ------
    ValueError
        If any channel is outside [0, 255].
    """
    for name, channel in (("r", r), ("g", g), ("b", b)):
        if not 0 <= channel <= 255:
            raise ValueError(f"Channel {name}={channel} out of range [0, 255]")
    return (r << 16) | (g << 8) | b


def unpack_rgb(color: int) -> tuple[int, int, int]:
    """Split ``0xRRGGBB`` into an ``(r, g, b)`` tuple."""
    if not 0 <= color <= 0xFFFFFF:
        raise ValueError(f"Packed colour {color!r} out of range [0, 0xFFFFFF]")
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


def to_hex(color: int) -> str:
    r, g, b = unpack_rgb(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def parse_color(value: Any) -> int:
    """Convert a config colour value to a packed int.

    Parameters
    ----------
    value : str | int | sequence of 3 ints
        ``"#RRGGBB"`` (the ``#`` is optional), a packed int, or an
        ``[r, g, b]`` triple.

    Returns
    -------
    int
        Packed ``0xRRGGBB`` colour.

    Raises
    ------
    ValueError
        If the value cannot be interpreted as an opaque RGB colour.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a colour: {value!r}")
    if isinstance(value, int):
        unpack_rgb(value)
        return value
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Hex colour must have 6 digits, got {value!r}")
        try:
            return int(text, 16)
        except ValueError:
            raise ValueError(f"Invalid hex colour: {value!r}") from None
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return pack_rgb(*(int(c) for c in value))
    raise ValueError(f"Not a colour: {value!r}")


def parse_palette(values: Iterable[Any]) -> tuple[int, ...]:
    """Parse every entry of a palette; emptiness is checked by the renderer."""
    return tuple(parse_color(v) for v in values)
