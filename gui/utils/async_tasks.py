"""Async helpers.

Controller operations block on network I/O. Views hand them to ``run_async``
so the UI loop keeps running; the returned Future resolves to the
operation's result.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

_executor: Optional[ThreadPoolExecutor] = None


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="cargopro-task")
    return _executor


def run_async(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
    return _get_executor().submit(fn, *args, **kwargs)


def shutdown(wait: bool = True) -> None:
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=wait)
        _executor = None
