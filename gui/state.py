"""Application state containers.

Controllers publish changes through ``Observable``: every change bumps
``version`` and calls each subscriber with the publisher. Views re-render on
any version change instead of tracking individual fields.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger("cargopro.gui.state")

Listener = Callable[[Any], None]


class Observable:
    """Minimal publish/subscribe base for controllers."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self.version = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self.version += 1
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                # A broken view must not abort the operation that published
                logger.exception("State listener %r failed", listener)


@contextmanager
def rollback_on_error(undo: Callable[[], None]) -> Iterator[None]:
    """Run the block; if it raises, call ``undo`` and re-raise."""
    try:
        yield
    except Exception:
        undo()
        raise


@dataclass
class Notice:
    """A user-facing notification (the GUI shows these as toasts)."""

    title: str
    message: str
    level: str = "info"  # "info" | "success" | "error"


@dataclass
class AppState:
    """Holds ephemeral app shell state."""

    current_view: str = "login"
    notices: List[Notice] = field(default_factory=list)
    flags: Dict[str, Any] = field(default_factory=dict)

    def push_notice(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def last_notice(self) -> Optional[Notice]:
        return self.notices[-1] if self.notices else None
