# planning_lab/core/logger.py
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "planning_lab"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Child logger below the package logger (module names are used as-is)."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logger.getChild(name)


def configure_logging(level: Union[int, str] = "INFO", log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Attach stream (and optional file) handlers to the package logger.

    Safe to call repeatedly: handlers are only added once.
    """
    logger.setLevel(level)

    if not any(getattr(h, "_planning_lab", False) for h in logger.handlers):
        # Stream handler (stdout)
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        stream_handler._planning_lab = True
        logger.addHandler(stream_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == path.resolve()
                   for h in logger.handlers):
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            file_handler._planning_lab = True
            logger.addHandler(file_handler)

    return logger
