# -*- coding: utf-8 -*-
"""
Parallel Chunks — deterministic partitioning and fork/join execution.

Splits an index space ``[0, count)`` into contiguous chunks, one per
worker, and runs a per-chunk callable on freshly started threads.  Each
worker writes its result into a private slot indexed by worker id, so
no locking is needed; the caller blocks once, at the join.

numpy kernels release the GIL, so chunk functions that operate on array
slices run concurrently.

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Tuple


def chunk_bounds(count: int, workers: int) -> List[Tuple[int, int]]:
    """Compute the ``[start, end)`` range owned by each worker.

    Chunks have size ``ceil(count / workers)``; the last non-empty chunk
    may be shorter and trailing chunks may be empty when *workers*
    exceeds *count*.

    Parameters
    ----------
    count : int
        Size of the index space.
    workers : int
        Number of workers.  Must be >= 1.

    Returns
    -------
    List[Tuple[int, int]]
        Exactly *workers* ranges, in worker-id order.

    Raises
    ------
    ValueError
        If *workers* < 1 or *count* < 0.
    """
    if workers < 1:
        raise ValueError(f"worker count must be >= 1, got {workers}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    chunk = (count + workers - 1) // workers
    bounds = []
    for w in range(workers):
        start = min(w * chunk, count)
        end = min(start + chunk, count)
        bounds.append((start, end))
    return bounds


def parallel_chunks(
    count: int,
    workers: int,
    fn: Callable[[int, int, int], Any],
    combine: Optional[Callable[[Any, Any], Any]] = None,
) -> Any:
    """Run *fn* over every chunk of ``[0, count)`` and join.

    Parameters
    ----------
    count : int
        Size of the index space.
    workers : int
        Number of workers (one thread per chunk).  Must be >= 1.
    fn : callable
        Called as ``fn(worker_id, start, end)``.  Its return value is
        stored in slot ``worker_id``.
    combine : callable, optional
        Binary reduction applied left-to-right over the slots in
        worker-id order.  If ``None``, the slot list is returned as is.

    Returns
    -------
    Any
        The combined value, or the list of per-worker results.

    Raises
    ------
    ValueError
        If *workers* < 1.
    Exception
        Any exception raised by a worker is re-raised after the join.
    """
    bounds = chunk_bounds(count, workers)
    slots: List[Any] = [None] * workers

    if workers == 1:
        slots[0] = fn(0, *bounds[0])
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(fn, w, start, end)
                for w, (start, end) in enumerate(bounds)
            ]
            for w, future in enumerate(futures):
                slots[w] = future.result()

    if combine is None:
        return slots

    result = slots[0]
    for partial in slots[1:]:
        result = combine(result, partial)
    return result
