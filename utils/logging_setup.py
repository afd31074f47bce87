"""
Logging Setup
Configures loguru sinks for the command line entry point
"""

import os
import sys
from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} | {extra} - {message}"
DEFAULT_LOG_FILE = "data/logs/deployer.log"


def configure_logging(level: str = None, log_file: str = DEFAULT_LOG_FILE):
    """
    Replace loguru's default sink with console and file sinks

    Args:
        level: Console level (None = LOG_LEVEL env or INFO)
        log_file: Rotating log file path (None disables file logging)
    """
    level = level or os.getenv('LOG_LEVEL', 'INFO')

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
