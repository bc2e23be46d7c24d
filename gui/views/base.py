"""Base class for headless views.

Views read controller state and turn it into plain text lines; a toolkit
front-end (or a terminal) decides how to draw them. Actions that hit the
network go through ``runner`` and hand back a Future.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, List

from gui.utils.async_tasks import run_async


@dataclass
class BaseView:
    name: str = "base"
    runner: Callable[..., Future] = run_async

    def submit_task(self, fn: Callable[..., Any], *args: Any) -> Future:
        return self.runner(fn, *args)

    def render(self) -> List[str]:
        return [self.name]
