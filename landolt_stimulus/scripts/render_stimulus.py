#!/usr/bin/env python3
"""
Render Stimulus Script.

Render a Landolt-ring stimulus image from a config file and a circle
layout.  Command-line values override the config.

Usage:
    landolt-render
    landolt-render --config my_stimulus.yaml --direction left
    landolt-render --layout circles.yaml --distance 4 --pixels-per-meter 3780
    landolt-render --dry-run --log-level DEBUG

Exit codes:
    0  image written (or dry run completed)
    1  invalid stimulus parameters (distance, density, direction, palette)
    2  configuration, layout or output file problem
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import yaml

from landolt_stimulus.canvas.pillow_canvas import PillowCanvas
from landolt_stimulus.canvas.recording import RecordingCanvas
from landolt_stimulus.configs.loader import ConfigError, StimulusConfig, load_config
from landolt_stimulus.stimulus.errors import StimulusError
from landolt_stimulus.stimulus.palette import SeededColorSource
from landolt_stimulus.stimulus.renderer import StimulusRenderer
from landolt_stimulus.stimulus.types import Direction, ViewingParameters
from landolt_stimulus.utils import fs
from landolt_stimulus.utils.color import to_hex
from landolt_stimulus.utils.logging_config import (
    install_excepthook,
    push_context,
    setup_logging,
)
from landolt_stimulus.utils.validators import load_circle_layout

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a Landolt-ring acuity stimulus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Directions: {', '.join(d.value for d in Direction)}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path (default: shipped stimulus.yaml)",
    )
    parser.add_argument(
        "--layout",
        "-l",
        type=str,
        help="circles.v1 layout file",
    )
    parser.add_argument(
        "--direction",
        "-d",
        type=str,
        help="Side the C opens towards",
    )

    # Viewing geometry
    parser.add_argument(
        "--distance",
        type=float,
        help="Observer distance from the screen (m)",
    )
    parser.add_argument(
        "--pixels-per-meter",
        type=float,
        help="Display pixel density (px/m)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for colour selection",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output image path",
    )
    parser.add_argument(
        "--metadata",
        type=str,
        help="Write a YAML sidecar describing the render",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Record draw calls without writing an image",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def apply_overrides(cfg: StimulusConfig, args: argparse.Namespace) -> StimulusConfig:
    """Return *cfg* with every command-line value that was given applied."""
    if args.distance is not None or args.pixels_per_meter is not None:
        viewing = ViewingParameters(
            distance_m=(
                args.distance if args.distance is not None
                else cfg.viewing.distance_m
            ),
            pixels_per_meter=(
                args.pixels_per_meter if args.pixels_per_meter is not None
                else cfg.viewing.pixels_per_meter
            ),
        )
        cfg = replace(cfg, viewing=viewing)
    if args.direction is not None:
        cfg = replace(cfg, direction=Direction.parse(args.direction))
    if args.seed is not None:
        if args.seed < 0:
            raise ConfigError(f"--seed must be >= 0, got {args.seed}")
        cfg = replace(cfg, seed=args.seed)
    if args.layout is not None:
        cfg = replace(cfg, layout=Path(args.layout))
    if args.output is not None:
        cfg = replace(cfg, output=replace(cfg.output, path=Path(args.output)))
    if args.metadata is not None:
        cfg = replace(cfg, output=replace(cfg.output, metadata=Path(args.metadata)))
    return cfg


def render(cfg: StimulusConfig, dry_run: bool = False) -> None:
    """Render *cfg* to its output file (or to a recorder on a dry run)."""
    if cfg.layout is None:
        raise ConfigError("No circle layout given (set 'layout' or pass --layout)")
    circles = load_circle_layout(cfg.layout)
    logger.info("Loaded %d circles from %s", len(circles), cfg.layout)

    canvas = RecordingCanvas() if dry_run else PillowCanvas(cfg.output.antialias)
    renderer = StimulusRenderer(canvas, SeededColorSource(cfg.seed))
    geometry = renderer.render(
        circles,
        cfg.palettes.field,
        cfg.palettes.ring,
        cfg.direction,
        cfg.viewing,
    )

    if dry_run:
        logger.info("Dry run: %d canvas operations recorded", len(canvas.ops))
        return

    canvas.save(cfg.output.path)

    if cfg.output.metadata is not None:
        fs.atomic_yaml_dump(
            {
                "image": str(cfg.output.path),
                "size_px": geometry.size_px,
                "pixels_per_degree": round(geometry.pixels_per_degree, 4),
                "distance_m": cfg.viewing.distance_m,
                "pixels_per_meter": cfg.viewing.pixels_per_meter,
                "direction": cfg.direction.value,
                "seed": cfg.seed,
                "layout": str(cfg.layout),
                "circles": len(circles),
                "palettes": {
                    "field": [to_hex(c) for c in cfg.palettes.field],
                    "ring": [to_hex(c) for c in cfg.palettes.ring],
                },
            },
            cfg.output.metadata,
        )
        logger.info("Wrote metadata to %s", cfg.output.metadata)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(log_level=args.log_level or "INFO", context={"app": "render"})
    install_excepthook()

    try:
        cfg = load_config(args.config)
        log_cfg = dict(cfg.logging)
        if args.log_level:
            log_cfg["log_level"] = args.log_level
        try:
            setup_logging(**log_cfg)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid logging section: {e}") from e
        cfg = apply_overrides(cfg, args)
    except (ConfigError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error("Configuration error: %s", e)
        return 2
    except StimulusError as e:
        logger.error("Invalid stimulus parameters: %s", e)
        return 1

    push_context(direction=cfg.direction.value, seed=cfg.seed)

    try:
        render(cfg, dry_run=args.dry_run)
    except StimulusError as e:
        logger.error("Invalid stimulus parameters: %s", e)
        return 1
    except (ConfigError, FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("Layout error: %s", e)
        return 2
    except (RuntimeError, OSError) as e:
        logger.error("Output error: %s", e)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
