"""
Package logger for the discount function.

Stages log through child loggers from get_logger(). The level is owned by
FunctionSettings.log_level and applied at the entry points with set_level();
until then the package logs at INFO.
"""
import logging
import sys

LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
DEFAULT_LEVEL = "INFO"

logger = logging.getLogger("bxgy_discount")
logger.setLevel(DEFAULT_LEVEL)

if not logger.handlers:
    # stdout carries the function result in CLI mode
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(_handler)
    logger.propagate = False


def get_logger(name: str = None) -> logging.Logger:
    """Child of the package logger, e.g. get_logger("engine")."""
    if name:
        return logger.getChild(name)
    return logger


def set_level(level: str) -> str:
    """Apply a level name to the package logger; unknown names fall back to INFO."""
    normalized = (level or "").strip().upper()
    if normalized not in LEVELS:
        logger.warning("Unknown log level %r, using %s", level, DEFAULT_LEVEL)
        normalized = DEFAULT_LEVEL
    logger.setLevel(normalized)
    return normalized
