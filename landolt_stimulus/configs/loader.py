"""Configuration loader for stimulus rendering.

Loads and validates ``stimulus.yaml`` into typed, frozen dataclasses.
Viewing geometry, palettes, gap direction, seed, layout and output are
all config values; the CLI may override individual fields.

Pixel density is given either directly (``pixels_per_meter``) or as the
physical screen width (``screen_width_px`` / ``screen_width_m``).

Usage::

    from landolt_stimulus.configs.loader import load_config
    cfg = load_config()                        # default path
    cfg = load_config("/custom/stimulus.yaml") # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from landolt_stimulus.stimulus.errors import StimulusError
from landolt_stimulus.stimulus.types import Direction, Palette, ViewingParameters
from landolt_stimulus.utils.color import parse_palette
from landolt_stimulus.utils.fs import load_yaml

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PaletteConfig:
    """Field (inner disc, outer ring, gap) and ring (the C) colours."""

    field: Palette
    ring: Palette


@dataclass(frozen=True)
class OutputConfig:
    """Where and how the rendered image is written.

    Parameters
    ----------
    path : Path
        Image file; the extension selects the format.
    antialias : int
        Supersampling factor for the Pillow canvas.
    metadata : Path | None
        Optional YAML sidecar describing the render.
    """

    path: Path
    antialias: int = 1
    metadata: Path | None = None


@dataclass(frozen=True)
class StimulusConfig:
    """Complete, validated render configuration."""

    viewing: ViewingParameters
    palettes: PaletteConfig
    direction: Direction
    output: OutputConfig
    seed: int | None = None
    layout: Path | None = None
    logging: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Section parsers
# ---------------------------------------------------------------------------


def _resolve(base: Path, value: Any) -> Path:
    p = Path(str(value)).expanduser()
    return p if p.is_absolute() else base / p


def _parse_viewing(data: dict[str, Any]) -> ViewingParameters:
    distance = data["distance_m"]
    if "pixels_per_meter" in data:
        return ViewingParameters(
            distance_m=distance,
            pixels_per_meter=data["pixels_per_meter"],
        )
    if "screen_width_px" in data and "screen_width_m" in data:
        return ViewingParameters.from_screen(
            distance_m=distance,
            screen_width_px=data["screen_width_px"],
            screen_width_m=data["screen_width_m"],
        )
    raise ConfigError(
        "viewing needs pixels_per_meter or screen_width_px + screen_width_m"
    )


def _parse_palettes(data: dict[str, Any]) -> PaletteConfig:
    return PaletteConfig(
        field=parse_palette(data["field"]),
        ring=parse_palette(data["ring"]),
    )


def _parse_output(data: dict[str, Any]) -> OutputConfig:
    antialias = int(data.get("antialias", 1))
    if antialias < 1:
        raise ConfigError(f"output.antialias must be >= 1, got {antialias}")
    metadata = data.get("metadata")
    return OutputConfig(
        path=Path(str(data["path"])).expanduser(),
        antialias=antialias,
        metadata=Path(str(metadata)).expanduser() if metadata else None,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> StimulusConfig:
    """Load and validate stimulus configuration from YAML.

    A relative ``layout`` path is resolved against the directory holding
    the config file; output paths are relative to the working directory.

    Parameters
    ----------
    path : str | Path | None
        Path to ``stimulus.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    StimulusConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    if path is None:
        path = Path(__file__).parent / "stimulus.yaml"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    data: dict[str, Any] = load_yaml(path)
    if not data:
        raise ConfigError(f"Empty configuration file: {path}")

    base = path.parent
    try:
        viewing = _parse_viewing(data["viewing"])
        palettes = _parse_palettes(data["palettes"])
        direction = Direction.parse(data["direction"])
        output = _parse_output(data["output"])

        seed = data.get("seed")
        if seed is not None:
            seed = int(seed)
            if seed < 0:
                raise ConfigError(f"seed must be >= 0, got {seed}")

        layout = data.get("layout")
        cfg = StimulusConfig(
            viewing=viewing,
            palettes=palettes,
            direction=direction,
            output=output,
            seed=seed,
            layout=_resolve(base, layout) if layout else None,
            logging=dict(data.get("logging") or {}),
        )
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e
    except KeyError as e:
        raise ConfigError(f"{path}: missing required key {e}") from e
    except (StimulusError, TypeError, ValueError) as e:
        raise ConfigError(f"{path}: {e}") from e

    logger.debug(
        "Config: distance=%.3f m, %.1f px/m, direction=%s, seed=%s",
        cfg.viewing.distance_m, cfg.viewing.pixels_per_meter,
        cfg.direction.value, cfg.seed,
    )
    return cfg
