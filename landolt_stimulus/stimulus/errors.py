"""Stimulus rendering errors.

All errors are precondition violations detected synchronously at the
call boundary.  Nothing is retried: there is no I/O and no transient
failure mode inside the renderer.
"""

from __future__ import annotations


class StimulusError(Exception):
    """Base class for every error raised by the stimulus renderer."""

    pass


class InvalidParameterError(StimulusError):
    """Viewing distance or pixel density is not a positive number."""

    pass


class InvalidDirectionError(StimulusError):
    """Gap direction is not one of UP, DOWN, LEFT, RIGHT."""

    pass


class EmptyPaletteError(StimulusError):
    """A colour palette has no entries to pick from."""

    pass
