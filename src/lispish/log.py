"""
Logging setup for lispish.

The package logger is silent by default. The CLI attaches a single stderr
handler through ``configure_logging``, with the level picked from the
``verbose`` and ``quiet`` settings:

    verbose  -> DEBUG    (token counts, file reads, command dispatch)
    default  -> WARNING  (configuration that was ignored or overridden)
    quiet    -> ERROR

``verbose`` wins when both are set. Library users can call
``configure_logging`` too, or attach their own handlers to the
``lispish`` logger.
"""

from __future__ import annotations

import logging
from typing import IO, Optional

LOGGER_NAME = "lispish"
HANDLER_NAME = "lispish-cli"
DEFAULT_FORMAT = "[%(levelname)s] %(message)s"

_logger = logging.getLogger(LOGGER_NAME)
_logger.addHandler(logging.NullHandler())  # Default: no output


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map the verbose/quiet switches to a logging level."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[IO[str]] = None,
    format: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """
    Send lispish log records to ``stream`` (stderr by default).

    Calling this again replaces the handler installed by the previous call,
    so repeated CLI invocations in one process do not duplicate output.

    Returns:
        The installed handler
    """
    _remove_cli_handler()

    level = level_for(verbose, quiet)
    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format))

    _logger.setLevel(level)
    _logger.addHandler(handler)
    return handler


def reset_logging() -> None:
    """Drop the handler installed by ``configure_logging`` and clear the level."""
    _remove_cli_handler()
    _logger.setLevel(logging.NOTSET)


def _remove_cli_handler() -> None:
    for handler in _logger.handlers[:]:
        if handler.get_name() == HANDLER_NAME:
            _logger.removeHandler(handler)
            handler.close()
