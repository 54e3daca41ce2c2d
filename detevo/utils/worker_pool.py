"""Fork-join worker pool used for per-individual work.

:class:`WorkerPool` wraps a :class:`~concurrent.futures.ThreadPoolExecutor` and
exposes an order-preserving :py:meth:`WorkerPool.map`. Results come back in
input order no matter which worker finishes first, so callers that derive
their randomness per item stay deterministic under any pool size.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import os
from typing import Callable, Iterable, TypeVar

from loguru import logger

from detevo.exceptions import ConfigurationError

__all__ = ["WorkerPool", "default_workers"]

T = TypeVar("T")
R = TypeVar("R")


def default_workers() -> int:
    return max(1, os.cpu_count() or 1)


class WorkerPool:
    """Data-parallel map with a join barrier.

    With ``max_workers == 1`` work runs inline on the calling thread.
    """

    def __init__(self, max_workers: int | None = None, *, thread_name_prefix: str = "detevo-worker"):
        if max_workers is None:
            max_workers = default_workers()
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self._thread_name_prefix = thread_name_prefix
        self._executor: ThreadPoolExecutor | None = None

    # ------------------------------------------------------------------
    # Executor management
    # ------------------------------------------------------------------

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix=self._thread_name_prefix,
            )
            logger.debug("[WorkerPool] Created ThreadPoolExecutor with {} workers", self.max_workers)
        return self._executor

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.debug("[WorkerPool] Shut down")

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Parallel map
    # ------------------------------------------------------------------

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        """Apply *fn* to every item and wait for all of them.

        The first exception raised by *fn* propagates to the caller once the
        batch has been submitted.
        """
        items = list(items)
        if self.max_workers == 1 or len(items) <= 1:
            return [fn(item) for item in items]
        return list(self._get_executor().map(fn, items))

    def __repr__(self) -> str:
        return f"WorkerPool(max_workers={self.max_workers})"
