"""
Logging for archwarden.

All package loggers live under the ``archwarden`` logger. ``setup_logging``
attaches handlers to that logger only, so embedding applications keep
their own root configuration, and it can be called again once the
configuration has been loaded (a ``verbosity`` set in ``archwarden.toml``
replaces the level chosen from command line flags).
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "archwarden"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_installed: list[logging.Handler] = []


def verbosity_from_flags(verbose: bool = False, quiet: bool = False) -> str:
    """``--quiet`` wins over ``--verbose``."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def level_for(verbosity: str) -> int:
    try:
        return VERBOSITY_LEVELS[verbosity]
    except KeyError:
        raise ValueError(
            f"Unknown verbosity '{verbosity}', expected one of {', '.join(VERBOSITY_LEVELS)}"
        ) from None


def _console_handler(verbose: bool) -> logging.Handler:
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )


def _file_handler(log_file: str) -> logging.Handler:
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``archwarden`` logger.

    Handlers from a previous call are closed and replaced.

    Args:
        verbosity: One of ``quiet`` (errors only), ``normal`` (warnings)
            or ``verbose`` (debug)
        log_file: Optional path; records are appended with timestamps

    Returns:
        The ``archwarden`` logger

    Raises:
        ValueError: If ``verbosity`` is not a known level name
    """
    level = level_for(verbosity)
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in _installed:
        logger.removeHandler(handler)
        handler.close()
    _installed.clear()

    _installed.append(_console_handler(verbose=level == logging.DEBUG))
    if log_file:
        _installed.append(_file_handler(log_file))
    for handler in _installed:
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a module, nested under ``archwarden``.

    Args:
        name: Module name (e.g., 'archwarden.graph.store'). Names outside
              the package are prefixed. If None, returns the package logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
