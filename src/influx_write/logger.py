# src/influx_write/logger.py
# The package logs through loguru but stays silent until an application opts in here.
import sys

from loguru import logger


def setup_logging(level: str = "INFO", sink=sys.stderr):
    logger.remove()
    logger.add(sink, level=level)
    logger.enable("influx_write")
    logger.info("Logger initialized at level {}", level)
    return logger
