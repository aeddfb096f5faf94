"""Shared construction for the bot's tagged stream loggers."""

from __future__ import annotations

import logging


def build_logger(name: str, tag: str, level: int = logging.INFO) -> logging.Logger:
    """Return `name` with a single `asctime | TAG | level | message` stream handler."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(f"%(asctime)s | {tag} | %(levelname)s | %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger
