import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "webapp_auth"


def setup_logger(debug_mode=False):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create colored formatter
    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)
    else:
        for existing in logger.handlers:
            existing.setLevel(logger.level)

    return logger


def get_debug_mode():
    return logger.isEnabledFor(logging.DEBUG)


def print_stack_trace():
    """Log the current exception's stack trace when debug mode is enabled."""
    if get_debug_mode():
        error_msg = traceback.format_exc()
        logger.error(error_msg)


def configure_logger(debug_mode=False):
    global logger
    logger = setup_logger(debug_mode=debug_mode)
    if debug_mode:
        logger.debug("Debug mode is active.")
    return logger


# Logger defaults to INFO unless reconfigured from the CLI or LOG_MODE.
logger = setup_logger(debug_mode=False)
