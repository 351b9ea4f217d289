import logging
import os
import sys
import time

PACKAGE_LOGGER = "lazysmt"
LEVEL_ENV_VAR = "LAZYSMT_LOG_LEVEL"

def level_from_env(default: int = logging.INFO) -> int:
    """Level named (or numbered) by LAZYSMT_LOG_LEVEL; unknown names give ``default``."""
    raw = os.getenv(LEVEL_ENV_VAR, "").strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper()) if raw else default
    return level if isinstance(level, int) else default

def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Returns a logger in the lazysmt hierarchy.

    The package logger owns the only stderr handler and does not propagate to
    the root logger. Loggers below it (``lazysmt.driver`` and the like) carry
    no handler and report through it. Names outside the package are nested
    under it.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"

    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(level_from_env())
    if not package.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%SZ"
        )
        # Timestamps are stamped Z, so render them in UTC
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        package.addHandler(handler)
    package.propagate = False

    return logging.getLogger(name)

logger = get_logger()
