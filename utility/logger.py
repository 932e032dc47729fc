import logging
import os
from datetime import datetime
from typing import Optional


def setup_logger(name: str = "utility", log_level=logging.INFO, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Set up a package-level logger with a console handler and, when log_dir is given,
    a daily file handler. Modules log through logging.getLogger(__name__) and
    propagate up to it.
    """

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # prevent duplicate handlers
    if logger.handlers:
        return logger

    logger.propagate = False

    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        log_filename = os.path.join(log_dir, f"hindi_email_{datetime.now().strftime('%Y%m%d')}.log")
        file_handler = logging.FileHandler(log_filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger
