"""
loguru sink setup shared by the app factory and scripts.
"""

import sys

from loguru import logger

from ideagraph.config import LoggingConfig

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}"


def configure_logging(cfg: LoggingConfig) -> None:
    """Replace loguru's default sink with a stderr sink at the configured level."""
    logger.remove()
    if cfg.serialize:
        logger.add(sys.stderr, level=cfg.level, serialize=True)
    else:
        logger.add(sys.stderr, level=cfg.level, format=LOG_FORMAT)
