"""Log utilities."""

import logging
from rich.logging import RichHandler

FORMAT = "%(message)s"
DATE_FORMAT = "[%X]"


def get_logger(name: str) -> logging.Logger:
    """Retrieve logger with the provided name."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers = [RichHandler()]
    logger.propagate = False
    return logger


def setup_logging(verbose: bool = False) -> None:
    """Configure root logger used by third party libraries."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[RichHandler()],
        force=True,
    )
