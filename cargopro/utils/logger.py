"""Centralized logger configuration.

Usage:
    from cargopro.utils.logger import get_logger
    logger = get_logger(__name__)

This avoids sprinkling basicConfig calls throughout the codebase.
"""
import logging
import os

DEFAULT_LEVEL = os.getenv("CP_LOG_LEVEL", "INFO").upper()


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # basicConfig is a no-op once a handler exists; still honour the level
    logging.getLogger().setLevel(numeric)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
