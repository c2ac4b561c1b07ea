"""Logging setup for the omst command-line tools.

stdout carries nothing but the tier, so every record goes to stderr through
rich, and optionally to a log file. Library modules only create loggers
with ``logging.getLogger(__name__)``; handlers are installed here, once per
CLI run, on the ``omst`` logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import OmstConfig

LEVELS = {
    "quiet": logging.CRITICAL,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

LOG_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(config: OmstConfig) -> logging.Logger:
    """Install stderr (and file) handlers on the ``omst`` logger.

    Handlers from a previous call are replaced, so running the CLI twice in
    one process doesn't duplicate output.
    """
    verbose = config.verbosity == "verbose"
    logger = logging.getLogger("omst")
    logger.setLevel(LEVELS[config.verbosity])

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=verbose,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
        )
    )

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        # The file records failures even when the terminal is quiet
        file_handler.setLevel(logging.DEBUG if verbose else logging.ERROR)
        logger.addHandler(file_handler)
        if config.verbosity == "quiet":
            logger.setLevel(logging.ERROR)
            logger.handlers[0].setLevel(logging.CRITICAL)

    return logger
