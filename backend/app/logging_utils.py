"""Central logging configuration used across modules."""

from __future__ import annotations

import logging

CONSOLE_HANDLER_NAME = "app.console"
FILE_HANDLER_NAME = "app.file"
OWN_HANDLER_NAMES = frozenset({CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME})


def owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    """Handlers on ``logger`` that ``setup_logging`` installed."""
    return [handler for handler in logger.handlers if handler.get_name() in OWN_HANDLER_NAMES]


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure and return the ``app`` logger.

    Logs are written to console, plus an optional file if `log_file` is set.
    Every module logs through ``logging.getLogger(__name__)`` under ``app``.
    Handlers attached by anything else (e.g. a test log capture) are left
    alone and do not count as configuration.
    """
    logger = logging.getLogger("app")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    if owned_handlers(logger):
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
