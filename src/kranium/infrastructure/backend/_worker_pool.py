"""
Shared worker pool for the parallel CPU backend.

Threads are used rather than processes: the range kernels spend their time in
NumPy ufuncs, which release the GIL, and threads can write straight into the
shared output buffer without pickling anything.

One `ThreadPoolExecutor` exists per distinct worker count. Pools are created
lazily on first use and reused by every backend value asking for that size.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, wait
from functools import lru_cache
from typing import Callable, Sequence

_THREAD_NAME_PREFIX = "kranium-worker"


@lru_cache(maxsize=None)
def get_worker_pool(max_workers: int) -> ThreadPoolExecutor:
    """
    Return the shared pool with ``max_workers`` threads.

    Parameters
    ----------
    max_workers : int
        Positive thread count.

    Returns
    -------
    ThreadPoolExecutor
        The same executor object for every call with the same count.
    """
    if max_workers <= 0:
        raise ValueError(f"max_workers must be positive, got {max_workers}")
    return ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix=_THREAD_NAME_PREFIX
    )


def partition(total: int, parts: int) -> list[tuple[int, int]]:
    """
    Split ``range(total)`` into at most ``parts`` contiguous, non-empty,
    near-equal ``(start, stop)`` ranges.

    Examples
    --------
    >>> partition(10, 3)
    [(0, 4), (4, 7), (7, 10)]
    >>> partition(2, 4)
    [(0, 1), (1, 2)]
    """
    if total <= 0:
        return []
    parts = max(1, min(parts, total))
    base, extra = divmod(total, parts)
    ranges = []
    start = 0
    for p in range(parts):
        stop = start + base + (1 if p < extra else 0)
        ranges.append((start, stop))
        start = stop
    return ranges


def _in_worker_thread() -> bool:
    return threading.current_thread().name.startswith(_THREAD_NAME_PREFIX)


def run_ranges(
    func: Callable[[int, int], None],
    ranges: Sequence[tuple[int, int]],
    max_workers: int,
) -> None:
    """
    Run ``func(start, stop)`` for every range and block until all finish.

    Parameters
    ----------
    func : Callable[[int, int], None]
        Range kernel. Calls for different ranges must touch disjoint output.
    ranges : Sequence[tuple[int, int]]
        Work items, typically from :func:`partition`.
    max_workers : int
        Size of the shared pool to run on.

    Raises
    ------
    Exception
        The first exception raised by any task, after every task has
        finished.
    """
    if len(ranges) <= 1 or max_workers <= 1 or _in_worker_thread():
        # nested calls run inline so a pool never waits on itself
        for start, stop in ranges:
            func(start, stop)
        return

    pool = get_worker_pool(max_workers)
    futures = [pool.submit(func, start, stop) for start, stop in ranges]
    wait(futures)
    for f in futures:
        f.result()
