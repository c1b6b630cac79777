import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")

ProgressCallback = Callable[[float], None]


async def run_in_batches(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    batch_size: int,
    on_progress: Optional[ProgressCallback] = None,
) -> List[R]:
    """
    Run ``worker`` over ``items`` in slices of ``batch_size``. Each slice runs
    concurrently and is awaited before the next one starts; results keep the
    input order. ``on_progress`` receives a 0-100 percentage after each slice.
    """
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")
    results: List[R] = []
    total = len(items)
    for start in range(0, total, batch_size):
        batch = items[start : start + batch_size]
        results.extend(await asyncio.gather(*(worker(item) for item in batch)))
        if on_progress:
            on_progress(min((start + batch_size) / total * 100, 100))
    return results
