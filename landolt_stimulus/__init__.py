"""Landolt Stimulus: Landolt-ring acuity stimulus rendering.

Renders a disc tiled by pre-positioned circles whose mid-radius annulus
forms a C in a second colour set, sized to subtend exactly 2 degrees of
visual angle at a given observer distance.

Subpackages:
    stimulus: Value types, geometry, classification and the renderer
    canvas: Drawing-surface abstraction, Pillow and recording surfaces
    configs: stimulus.yaml loading and validation
    utils: Colour parsing, atomic I/O, layout validation, logging
    scripts: Command-line entrypoint

Key invariants:
    - Geometry in normalized disc coordinates (radius 1, +Y down)
    - The canvas is square and its side is always an even pixel count
    - Invalid inputs fail before the canvas is touched
"""

__version__ = "1.0.0"

__all__ = ["stimulus", "canvas", "configs", "utils", "scripts"]
