# coingecko/logger.py
import logging
import sys

from .config import get_config


def setup_logging() -> None:
    """Sets up logging for applications using the client."""
    log_level_str = get_config("logging", "level", "LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    log_file = get_config("logging", "file", "LOG_FILE", "")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
