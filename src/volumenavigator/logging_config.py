"""
Logging Configuration
Sets up the 'volumenavigator' logger used by the model, the controllers and
the view.
"""
import logging
import os
import sys
from typing import Optional, Sequence

LOG_LEVEL_ENV = "VOLUMENAVIGATOR_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Libraries that log every render/pick at INFO
NOISY_LOGGERS: tuple[str, ...] = ("pyvista", "vtkmodules")


def resolve_level(level: int) -> int:
    """The VOLUMENAVIGATOR_LOG_LEVEL environment variable (e.g. "DEBUG") wins over `level`."""
    name = os.environ.get(LOG_LEVEL_ENV)
    if not name:
        return level
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else level


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    quiet: Sequence[str] = NOISY_LOGGERS
) -> logging.Logger:
    """
    Configures the 'volumenavigator' namespace: a stdout handler, an optional
    file handler, and WARNING for the `quiet` third-party loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG to follow every plane mutation)
        log_file: Optional path to save logs to a file.
        quiet: Logger names capped at WARNING.
    """
    level = resolve_level(level)
    logger = logging.getLogger("volumenavigator")
    logger.setLevel(level)

    # The navigator can be built several times per process (tests, embedding)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
