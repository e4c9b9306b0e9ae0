"""
Explicitly sized worker pool shared by the file-level and line-level fan-out.

The orchestrator submits one task per file. A large file, scanned inside one
of those tasks, fans its lines out over the *same* pool with ``map_chunks``.
Blocking on queued sub-tasks from inside a worker could deadlock a saturated
pool, so ``map_chunks`` uses a caller-helps scheme: the calling thread pulls
chunks itself, helpers pull from the same iterator, and helpers that have not
started by the time the caller runs out of chunks are cancelled. The caller
therefore only ever waits for helpers that are already running.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class _ChunkFeed(Generic[T]):
    """Thread-safe source of ``(index, chunk)`` pairs."""

    def __init__(self, chunks: Sequence[T]) -> None:
        self._iter: Iterator[tuple[int, T]] = enumerate(chunks)
        self._lock = threading.Lock()

    def next(self) -> tuple[int, T] | None:
        with self._lock:
            return next(self._iter, None)


class WorkerPool:
    """
    Fixed-size thread pool.

    Example:
        >>> with WorkerPool(4) as pool:
        ...     fut = pool.submit(sum, [1, 2, 3])
        ...     fut.result()
        6
    """

    def __init__(self, workers: int = 4, thread_name_prefix: str = "pargrep") -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=thread_name_prefix
        )

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def submit(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> Future[R]:
        return self._executor.submit(fn, *args, **kwargs)

    def map_chunks(self, fn: Callable[[T], R], chunks: Sequence[T]) -> list[R]:
        """
        Apply ``fn`` to every chunk using the pool plus the calling thread.

        Results come back in chunk order regardless of which thread ran them.
        Safe to call from inside a task already running on this pool.
        """
        results: list[R | None] = [None] * len(chunks)
        if not chunks:
            return []

        feed: _ChunkFeed[T] = _ChunkFeed(chunks)

        def drain() -> None:
            while (item := feed.next()) is not None:
                index, chunk = item
                results[index] = fn(chunk)

        helpers = [self.submit(drain) for _ in range(min(self.workers - 1, len(chunks) - 1))]
        drain()

        for helper in helpers:
            # a helper still queued has no work left to do
            if not helper.cancel():
                helper.result()

        return results  # type: ignore[return-value]
