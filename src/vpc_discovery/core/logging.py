"""Logging configuration for VPC discovery."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("vpc_discovery")

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _reset_handlers() -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    debug: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Configure the package logger for a resolution run.

    Progress (INFO) and cache/filter detail (DEBUG) stay out of the terminal
    unless ``debug`` is set; retries, ambiguous VPC names and failed
    functions always reach stderr. Safe to call more than once.

    Args:
        debug: Show every record on stderr
        log_file: Also write every record, with timestamps, to this file

    Returns:
        The ``vpc_discovery`` logger
    """
    _reset_handlers()
    logger.setLevel(logging.DEBUG if debug or log_file else logging.INFO)

    console = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. ``get_logger("ec2")`` is ``vpc_discovery.ec2``"""
    return logger.getChild(name)
