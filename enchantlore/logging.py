import logging
import os

LOG_LEVEL_ENV_VAR = "ENCHANTLORE_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; the root level comes from ``$ENCHANTLORE_LOG_LEVEL``."""
    level = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s:%(name)s:%(message)s")
    return logging.getLogger(name)
