"""Process-wide worker pool shared by config loads and dispatched analyses."""

from __future__ import annotations

import atexit
import logging
import threading
import concurrent.futures
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

_LOGGER = logging.getLogger(__name__)

_POOL: ThreadPoolExecutor | None = None
_POOL_LOCK = threading.Lock()


def init_pool(max_workers: int) -> ThreadPoolExecutor:
    """Create the shared pool, or return it if it is already running."""

    global _POOL
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")
    with _POOL_LOCK:
        if _POOL is None:
            _POOL = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="analyzer-ci")
            atexit.register(shutdown_pool)
            _LOGGER.debug("Worker pool started with %d workers", max_workers)
        return _POOL


def get_pool() -> ThreadPoolExecutor:
    if _POOL is None:
        raise RuntimeError("Worker pool is not initialized; call init_pool() at startup")
    return _POOL


def shutdown_pool(wait: bool = True) -> None:
    global _POOL
    with _POOL_LOCK:
        pool, _POOL = _POOL, None
    if pool is not None:
        pool.shutdown(wait=wait)
        _LOGGER.debug("Worker pool shut down")


def join(*futures: Future[Any]) -> list[Future[Any]]:
    """Block until every future has finished and return them in order."""

    concurrent.futures.wait(futures, return_when=concurrent.futures.ALL_COMPLETED)
    return list(futures)
