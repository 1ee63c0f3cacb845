"""Logging setup shared by the render CLI and embedding applications.

Library modules only ever do ``logger = logging.getLogger(__name__)``;
handlers, levels and formats are owned by :func:`setup_logging`.

Public API:
    setup_logging(**cfg.logging, context={"app": "render"})
    get_logger(name)
    push_context(direction="up", seed=42)
    pop_context(keys=["seed"])
    install_excepthook()
    route_warnings()

Line formats:
    human  2026-10-18T13:45:12.345Z | INFO     | app=render seed=42 | Rendered 382x382 px
    json   {"t": "...", "lvl": "INFO", "name": "...", "msg": "...", "app": "render"}

Context fields live in a ``contextvars.ContextVar``, so concurrent
renders in separate threads or tasks keep their own ``direction``/``seed``.
Calling :func:`setup_logging` again replaces the handlers it installed
earlier and leaves foreign handlers (pytest's, an embedding app's) alone.
"""

from __future__ import annotations

import contextvars
import json as jsonlib
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "landolt_log_context", default={}
)

_installed: list[logging.Handler] = []

# Pillow logs every PNG chunk at DEBUG
_DEFAULT_QUIET = ("PIL",)

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class ContextFormatter(logging.Formatter):
    """Render records with the current context fields attached.

    Parameters
    ----------
    fmt_mode : str
        ``"human"`` for pipe-separated lines, ``"json"`` for one JSON
        object per line.
    use_color : bool
        Colour the level name.  Ignored unless stderr is a terminal.
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = False) -> None:
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        fields = _context.get()
        if self.fmt_mode == "json":
            payload: dict[str, Any] = {
                "t": ts.isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "name": record.name,
                "msg": record.getMessage(),
                **fields,
            }
            if record.exc_info:
                payload["exc"] = self.formatException(record.exc_info)
            return jsonlib.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"
        parts = [ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z", level]
        if fields:
            parts.append(" ".join(f"{k}={v}" for k, v in fields.items()))
        parts.append(record.getMessage())
        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _file_handler(log_file: str | Path, rotate: dict[str, Any] | None) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rotate:
        return logging.FileHandler(path, encoding="utf-8")

    mode = rotate.get("mode", "size")
    if mode == "size":
        return logging.handlers.RotatingFileHandler(
            path,
            maxBytes=int(rotate.get("max_bytes", 10_000_000)),
            backupCount=int(rotate.get("backup_count", 5)),
            encoding="utf-8",
        )
    if mode == "time":
        return logging.handlers.TimedRotatingFileHandler(
            path,
            when=rotate.get("when", "D"),
            interval=int(rotate.get("interval", 1)),
            backupCount=int(rotate.get("backup_count", 7)),
            encoding="utf-8",
        )
    raise ValueError(f"Unknown rotation mode {mode!r}; use 'size' or 'time'")


def setup_logging(
    log_level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: dict[str, Any] | None = None,
    capture_warnings: bool = True,
    quiet_libs: list[str] | None = None,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Configure the root logger, replacing handlers from earlier calls.

    Parameters
    ----------
    log_level : str
        ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"`` or ``"CRITICAL"``.
    log_file : str | Path | None
        Also log to this file (parent directories are created).
    json : bool
        JSON lines in the file handler.  The console is always human.
    color : bool
        Colour level names on an interactive console.
    to_stderr : bool
        Attach a console handler.
    rotate : dict | None
        ``{"mode": "size", "max_bytes": ..., "backup_count": ...}`` or
        ``{"mode": "time", "when": "D", "interval": 1, "backup_count": ...}``.
    capture_warnings : bool
        Route ``warnings.warn`` through logging.
    quiet_libs : list[str] | None
        Loggers raised to WARNING.  Defaults to Pillow's.
    context : dict | None
        Fields pushed onto the log context, e.g. ``{"app": "render"}``.

    Returns
    -------
    dict
        ``{"handlers": [...]}`` with the handlers now installed.

    Raises
    ------
    ValueError
        On an unknown level or rotation mode.
    """
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    handlers: list[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", use_color=color))
        handlers.append(console)
    if log_file:
        fh = _file_handler(log_file, rotate)
        fh.setFormatter(ContextFormatter("json" if json else "human"))
        handlers.append(fh)

    root = logging.getLogger()
    while _installed:
        old = _installed.pop()
        root.removeHandler(old)
        old.close()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)
    _installed.extend(handlers)

    for lib in _DEFAULT_QUIET if quiet_libs is None else quiet_libs:
        logging.getLogger(lib).setLevel(logging.WARNING)
    if capture_warnings:
        route_warnings()
    if context:
        push_context(**context)

    return {"handlers": handlers}


# ---------------------------------------------------------------------------
# Context and hooks
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def push_context(**fields: Any) -> None:
    """Attach *fields* to every following record in this context."""
    _context.set({**_context.get(), **fields})


def pop_context(keys: list[str] | None = None) -> None:
    """Drop the named context fields, or all of them."""
    if keys is None:
        _context.set({})
        return
    _context.set({k: v for k, v in _context.get().items() if k not in keys})


def install_excepthook() -> None:
    """Log uncaught exceptions at CRITICAL; Ctrl+C keeps the default hook."""

    def _hook(exc_type, exc_value, tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, tb)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, tb)
        )

    sys.excepthook = _hook


def route_warnings() -> None:
    logging.captureWarnings(True)
