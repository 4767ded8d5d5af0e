from __future__ import annotations

import logging
import os
import traceback
from datetime import datetime
from pathlib import Path

_LOGGER = logging.getLogger("chordgen.logging")
_PACKAGE_LOGGER = "chordgen"
_LOG_DIR_ENV = "CHORDGEN_LOG_DIR"
_LOG_LEVEL_ENV = "CHORDGEN_LOG_LEVEL"
_LOG_FILE = "chordgen.log"


def get_log_dir() -> Path:
    configured = os.environ.get(_LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "chordgen" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / _LOG_FILE


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach a NullHandler to the package logger and apply the env log level."""

    logger = logging.getLogger(_PACKAGE_LOGGER)
    if not any(isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        logger.addHandler(logging.NullHandler())
    resolved = level if level is not None else os.environ.get(_LOG_LEVEL_ENV)
    if resolved is None:
        return logger
    if isinstance(resolved, str):
        numeric = logging.getLevelName(resolved.strip().upper())
        if not isinstance(numeric, int):
            _LOGGER.warning("Ignoring unknown log level %r", resolved)
            return logger
        resolved = numeric
    logger.setLevel(resolved)
    return logger


def log_exception(context: str, exc: BaseException) -> Path | None:
    try:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        path = get_log_path()
        timestamp = datetime.now().isoformat()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"[{timestamp}] {context} failed: {type(exc).__name__}: {exc}\n")
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=handle)
            handle.write("\n")
        return path
    except Exception as log_exc:
        _LOGGER.warning("Failed to write log file: %s", log_exc, exc_info=True)
        return None
