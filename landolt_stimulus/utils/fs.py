"""Atomic file output and YAML I/O.

Stimulus images and metadata sidecars are written to a sibling temp file
and renamed into place, so a viewer polling the output path never sees a
half-written PNG.

Usage:
    from landolt_stimulus.utils import fs
    fs.atomic_save_image(canvas.to_image(), "outputs/stimulus.png")
    fs.atomic_yaml_dump(metadata, "outputs/stimulus.meta.yaml")
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Union

import numpy as np
import yaml
from PIL import Image

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """Create *p* (and parents) if missing; return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


@contextmanager
def _staged(path: Path, tmp_path: Path, what: str) -> Iterator[Path]:
    """Yield *tmp_path* for writing, then move it onto *path*.

    On any failure the temp file is removed and a RuntimeError naming
    *what* is raised.
    """
    ensure_dir(path.parent)
    try:
        yield tmp_path
        tmp_path.replace(path)
    except Exception as e:
        tmp_path.unlink(missing_ok=True)
        raise RuntimeError(f"Failed to write {what} {path} atomically: {e}") from e


def atomic_write_text(path: PathLike, text: str) -> None:
    """Write UTF-8 *text* to *path*, fsynced before the rename."""
    path = Path(path)
    with _staged(path, path.with_name(path.name + ".tmp"), "file") as tmp:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())


def atomic_save_image(
    img: Union[np.ndarray, Image.Image],
    path: PathLike,
    **save_kwargs: Any,
) -> None:
    """Save an image atomically; the format follows *path*'s extension.

    Parameters
    ----------
    img : np.ndarray | PIL.Image.Image
        ``(H, W, 3)`` or ``(H, W)`` array (non-uint8 arrays are clipped
        to [0, 255]) or a PIL image.
    path : str | Path
        Destination file.
    **save_kwargs
        Passed to ``PIL.Image.Image.save`` (e.g. ``optimize=True``).

    Raises
    ------
    RuntimeError
        If Pillow cannot encode or write the image.
    """
    path = Path(path)
    if isinstance(img, np.ndarray):
        if img.dtype != np.uint8:
            img = np.clip(img, 0, 255).astype(np.uint8)
        img = Image.fromarray(img)

    # Extension stays last so Pillow still infers the format from the name
    tmp_name = f"{path.stem}.tmp{path.suffix}"
    with _staged(path, path.with_name(tmp_name), "image") as tmp:
        img.save(tmp, **save_kwargs)


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """Dump *obj* with ``yaml.safe_dump``, keeping insertion order."""
    text = yaml.safe_dump(
        obj, default_flow_style=False, sort_keys=False, allow_unicode=True
    )
    atomic_write_text(path, text)


def load_yaml(path: PathLike) -> Dict[str, Any]:
    """Parse a YAML file with ``yaml.safe_load``.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    yaml.YAMLError
        If the file is not valid YAML; the message names the file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
