"""
Shared worker pool for offloading native calls.

Native construction and detection run synchronously by default; the
``*_async`` variants submit them here so an event loop or UI thread is not
blocked. The pool is created on first use.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .logger import get_logger

logger = get_logger("workers")

DEFAULT_MAX_WORKERS = 4

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Return the shared executor, creating it if needed"""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=DEFAULT_MAX_WORKERS,
                thread_name_prefix="feature-detectors"
            )
            logger.debug(f"Started worker pool with {DEFAULT_MAX_WORKERS} threads")
        return _executor


def submit(fn: Callable, *args, **kwargs) -> Future:
    return get_executor().submit(fn, *args, **kwargs)


def shutdown_executor(wait: bool = True):
    """Stop the shared executor. A later submit starts a new one."""
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None
            logger.debug("Worker pool shut down")
