"""Logging helpers for the GUI.

Avoids configuring global logging in tests.
"""

from __future__ import annotations

import logging

from gui.state import Notice

logger = logging.getLogger("cargopro.gui")

_NOTICE_LEVELS = {
    "error": logging.WARNING,
    "success": logging.INFO,
    "info": logging.INFO,
}


def log(message: str, level: int = logging.INFO) -> None:
    logger.log(level, message)


def log_notice(notice: Notice) -> None:
    log(f"{notice.title}: {notice.message}", _NOTICE_LEVELS.get(notice.level, logging.INFO))
