import sys

from loguru import logger


def configure_logging(level="INFO"):
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, format="{time} {level} {message}", level=level)
