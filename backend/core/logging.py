import sys

from loguru import logger


def setup_logging(level: str = "INFO"):
    logger.remove()
    logger.add(sys.stdout, level=level.upper())
    return logger
