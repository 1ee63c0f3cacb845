"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Colour parsing and packing (color)
    - Atomic I/O and YAML (fs)
    - Circle layout validation (validators)
    - Unified logging (logging_config)

Convenience imports:
    from landolt_stimulus.utils import fs, color, validators
    from landolt_stimulus.utils.logging_config import setup_logging, get_logger
"""
