"""Tests for pargrep.core.pool module."""

from __future__ import annotations

import threading

import pytest

from pargrep.core.pool import WorkerPool


class TestWorkerPool:
    """Tests for WorkerPool."""

    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError):
            WorkerPool(0)

    def test_submit(self):
        with WorkerPool(2) as pool:
            assert pool.submit(sum, [1, 2, 3]).result() == 6

    def test_map_chunks_keeps_order(self):
        with WorkerPool(4) as pool:
            assert pool.map_chunks(lambda x: x * 2, list(range(50))) == [x * 2 for x in range(50)]

    def test_map_chunks_empty(self):
        with WorkerPool(2) as pool:
            assert pool.map_chunks(lambda x: x, []) == []

    def test_map_chunks_single_worker_runs_inline(self):
        seen: set[str] = set()

        def record(x: int) -> int:
            seen.add(threading.current_thread().name)
            return x

        with WorkerPool(1) as pool:
            assert pool.map_chunks(record, [1, 2, 3]) == [1, 2, 3]
        assert seen == {threading.current_thread().name}

    def test_nested_map_chunks_on_saturated_pool_does_not_deadlock(self):
        """Every worker runs a task that itself fans out over the same pool."""
        with WorkerPool(2) as pool:

            def outer(n: int) -> int:
                return sum(pool.map_chunks(lambda x: x + n, list(range(10))))

            futures = [pool.submit(outer, n) for n in range(8)]
            results = [f.result(timeout=10) for f in futures]

        assert results == [sum(range(10)) + 10 * n for n in range(8)]

    def test_map_chunks_propagates_errors(self):
        def boom(x: int) -> int:
            raise RuntimeError("boom")

        with WorkerPool(2) as pool:
            with pytest.raises(RuntimeError):
                pool.map_chunks(boom, [1])
