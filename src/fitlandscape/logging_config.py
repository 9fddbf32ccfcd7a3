"""
Logging Configuration
Sets up the application logger for both the GUI and the headless CLI.
"""
import logging
import sys
from typing import Optional, Union

# Third-party loggers that flood the console when the app runs at DEBUG
NOISY_LOGGERS = ("numba", "matplotlib", "PIL")


def resolve_level(level: Union[int, str]) -> int:
    """
    Convert a level name coming from the command line (e.g. "debug") into
    the numeric logging level.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'fitlandscape' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, "INFO")
        log_file: Optional path to save logs to a file.
    """
    level = resolve_level(level)

    logger = logging.getLogger("fitlandscape")
    logger.setLevel(level)

    # Re-running setup (GUI restart, repeated CLI calls in tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info("Logging initialized.")
