"""
Logger setup for cat_solver modules.

Every module calls ``get_logger(__name__)``. Records go to stderr at the level
named by $CAT_SOLVER_LOG_LEVEL (default WARNING); solve outcomes are logged
at INFO and handle lifecycle events at DEBUG.
"""
import logging
import os
import sys

LOG_LEVEL_ENV = "CAT_SOLVER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str) -> logging.Logger:
    """Return the logger ``name`` with a single stderr handler attached."""
    logger = logging.getLogger(name)
    logger.setLevel(_level_from_env())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)

    # one handler per module logger; the root logger would print twice
    logger.propagate = False
    return logger
