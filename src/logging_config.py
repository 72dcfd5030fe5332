"""
Logging Configuration
Console logging for the checker and its command-line tool
"""
import logging
import sys

import settings

_logging_configured = False


def setup_logging(app_name='plagiarism'):
    """Configure logging for the application

    Sets up console logging with timestamps and levels.
    Safe to call more than once; only the first call configures handlers.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger(app_name)

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)

    _logging_configured = True
    return logger


def get_logger(name):
    """Get a logger for a specific module

    Args:
        name: Module name (e.g., 'detector', 'preprocessor', 'main')

    Returns:
        Logger instance under the plagiarism namespace
    """
    return logging.getLogger(f'plagiarism.{name}')
