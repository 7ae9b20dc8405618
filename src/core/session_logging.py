"""
Logging setup for driver sessions.

All driver modules log through children of the ``openbci`` logger:
- openbci.device     - command writes
- openbci.handshake  - reset handshake steps
- openbci.simulator  - simulated board state changes
- openbci.transport  - port open/close
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

LOGGER_NAME = "openbci"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

_handlers: List[logging.Handler] = []


def get_logger(name: str = "") -> logging.Logger:
    """Get the driver logger, or one of its children."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the driver logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Logging level for the driver logger.
        log_file: Optional path of a log file to append to.

    Returns:
        The configured ``openbci`` logger.
    """
    close_logging()

    logger = get_logger()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    _handlers.append(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        _handlers.append(file_handler)

    for handler in _handlers:
        logger.addHandler(handler)

    return logger


def close_logging():
    """Detach and close handlers added by configure_logging."""
    logger = get_logger()
    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()
