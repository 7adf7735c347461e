"""Logging configuration for the oaitool package."""
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Libraries that are only interesting at debug level
NOISY_LOGGERS = ('urllib3', 'requests')


def level_for_verbosity(verbosity: int) -> int:
    """Map the number of -v flags to a log level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0) -> logging.Logger:
    """
    Configure the root logger for a command line run.

    Args:
        verbosity: Number of times -v was given

    Returns:
        The package logger
    """
    level = level_for_verbosity(verbosity)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # Disable debug logging for noisy libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if level == logging.DEBUG else logging.WARNING)

    logger = logging.getLogger('oaitool')
    logger.debug("Debug logging enabled")
    return logger
