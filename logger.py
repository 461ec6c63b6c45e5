# logger.py
"""
Logging configuration.
"""

import logging
import sys

HANDLER_NAME = "chat_api"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(level: str = "INFO", log_format: str = LOG_FORMAT) -> logging.Logger:
    """
    Configure the root logger once per process and return it.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_format: Format string for the stdout handler
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers on warm starts
    if any(h.get_name() == HANDLER_NAME for h in root.handlers):
        return root

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format))
    handler.set_name(HANDLER_NAME)
    root.addHandler(handler)

    return root
