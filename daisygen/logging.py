"""Logger setup for the daisygen CLI.

Pipeline modules log at DEBUG only; user-facing progress goes through the
orchestrator's reporter. ``configure_logging`` decides where those debug
records end up: the terminal with ``--verbose``, and a file with ``--log-file``.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "daisygen"

CONSOLE_FORMAT = "[daisygen] %(levelname)s %(message)s"
# Generation may run on a thread pool, so file records carry the thread name.
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """``get_logger("parser")`` is the ``daisygen.parser`` logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and, when ``log_file`` is given, a debug file sink.

    The console only shows warnings unless ``verbose``. The log file always
    receives the full debug trace. Calling this again replaces (and closes)
    the handlers of the previous call.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    _remove_handlers(logger)
    logger.propagate = False

    handlers = [_console_handler(logging.DEBUG if verbose else logging.WARNING)]
    if log_file is not None:
        handlers.append(_file_handler(Path(log_file)))
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(min(handler.level for handler in handlers))
    return logger


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
