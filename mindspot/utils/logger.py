import logging
import os
import sys

from mindspot import config

# Constants
LOG_FILE_NAME = "mindspot.log"
LOG_FORMAT = "[%(asctime)s] | %(levelname)-8s | %(name)-15s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = "mindspot") -> logging.Logger:
    """
    Configures and returns a standardized logger.

    Features:
    - Console Output (StreamHandler)
    - File Output, overwritten on each run
    - Standardized Formatting

    Args:
        name: Name of the logger module

    Returns:
        Configured Logger instance
    """
    logger = logging.getLogger(name)
    level = config.get_log_level()
    logger.setLevel(level)

    # Avoid duplicate handlers if setup is called multiple times
    if logger.handlers:
        return logger

    log_dir = config.get_log_dir()
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    log_path = os.path.join(log_dir, LOG_FILE_NAME)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)

    return logger
