import logging
import os
import sys

LOGGER_NAME = "sdkbench"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def configure_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Attach console and optional file handlers to the package logger once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(log_file)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
